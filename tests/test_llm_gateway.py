import json
import unittest

import httpx
from openai import OpenAI

from resume_tailor.ai.decode import decode_model_json, strip_code_fences
from resume_tailor.ai.factory import get_ai_client
from resume_tailor.ai.gateway import LLMGateway
from resume_tailor.ai.providers.claude_provider import ClaudeProvider
from resume_tailor.ai.providers.openai_provider import OpenAIProvider
from resume_tailor.ai.types import ChatMessage
from resume_tailor.core.config import Settings
from resume_tailor.core.errors import LLMNotConfiguredError, ParseError, UpstreamError
from resume_tailor.schemas.generation import GenerationResult
from tests.fakes import GENERATION_REPLY, FakeAIClient


class DecodeTests(unittest.TestCase):
    def test_strip_code_fences(self):
        raw = '```json\n{"a": 1}\n```'
        once = strip_code_fences(raw)
        self.assertEqual(once, '{"a": 1}')
        self.assertEqual(strip_code_fences(once), once)
        self.assertEqual(strip_code_fences('```\n{"a": 1}```'), '{"a": 1}')
        self.assertEqual(strip_code_fences(""), "")

    def test_decode_valid_reply(self):
        result = decode_model_json(json.dumps(GENERATION_REPLY), GenerationResult)
        self.assertEqual(result.ats_score, 87)
        self.assertEqual(result.resume.skills, ["Go", "Kubernetes", "Leadership"])

    def test_decode_rejects_invalid_replies(self):
        bad_replies = [
            "not json",
            "[1, 2, 3]",
            json.dumps({"resume": {"summary": "x"}, "atsScore": "lots"}),
            json.dumps({"email": "missing resume"}),
        ]
        for reply in bad_replies:
            with self.assertRaises(ParseError) as ctx:
                decode_model_json(reply, GenerationResult)
            self.assertEqual(ctx.exception.message, "Failed to parse AI response")

    def test_score_is_clamped(self):
        for raw, expected in ((-5, 0), (101, 100), ("72%", 72), (64.6, 65)):
            reply = dict(GENERATION_REPLY, atsScore=raw)
            self.assertEqual(decode_model_json(json.dumps(reply), GenerationResult).ats_score, expected)

    def test_non_finite_score_is_rejected(self):
        for score in ("Infinity", "-Infinity", "NaN", "1e999", "1" + "0" * 400):
            with self.assertRaises(ParseError):
                decode_model_json('{"resume": {}, "atsScore": %s}' % score, GenerationResult)

    def test_null_fields_fall_back_to_defaults(self):
        reply = dict(GENERATION_REPLY, email=None, matchedKeywords=None)
        result = decode_model_json(json.dumps(reply), GenerationResult)
        self.assertEqual(result.email, "")
        self.assertEqual(result.matched_keywords, [])


class GatewayTests(unittest.TestCase):
    def test_complete_json_sends_single_user_message(self):
        fake = FakeAIClient("```json\n" + json.dumps(GENERATION_REPLY) + "\n```")
        gateway = LLMGateway(fake)

        result = gateway.complete_json("Write a resume", GenerationResult, tool="test")
        self.assertEqual(result.email, "Dear Hiring Manager,")
        self.assertEqual(fake.prompts, ["Write a resume"])
        self.assertEqual(gateway.model, "fake-model")

    def test_provider_errors_propagate(self):
        gateway = LLMGateway(FakeAIClient(error=UpstreamError(503, "unavailable")))
        with self.assertRaises(UpstreamError) as ctx:
            gateway.complete("prompt")
        self.assertEqual(ctx.exception.status_code, 503)


class ClaudeProviderTests(unittest.TestCase):
    def test_request_shape_and_text_reply(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["headers"] = request.headers
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json={"content": [{"type": "text", "text": "hello"}]})

        provider = ClaudeProvider(
            model="claude-test",
            api_key="sk-test",
            max_tokens=1234,
            transport=httpx.MockTransport(handler),
        )
        text = provider.complete(
            [ChatMessage(role="system", content="be brief"), ChatMessage(role="user", content="hi")]
        )

        self.assertEqual(text, "hello")
        self.assertEqual(captured["url"], "https://api.anthropic.com/v1/messages")
        self.assertEqual(captured["headers"]["x-api-key"], "sk-test")
        self.assertEqual(captured["headers"]["anthropic-version"], "2023-06-01")
        self.assertEqual(captured["body"]["max_tokens"], 1234)
        self.assertEqual(captured["body"]["system"], "be brief")
        self.assertEqual(captured["body"]["messages"], [{"role": "user", "content": "hi"}])

    def test_non_success_status(self):
        provider = ClaudeProvider(
            model="claude-test",
            api_key="sk-test",
            transport=httpx.MockTransport(lambda request: httpx.Response(401, text="invalid x-api-key")),
        )
        with self.assertRaises(UpstreamError) as ctx:
            provider.complete([ChatMessage(role="user", content="hi")])
        self.assertEqual(ctx.exception.status_code, 401)
        self.assertEqual(ctx.exception.payload(), {"error": "Claude API error", "details": "invalid x-api-key"})

    def test_transport_failure_is_bad_gateway(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        provider = ClaudeProvider(model="claude-test", api_key="sk-test", transport=httpx.MockTransport(handler))
        with self.assertRaises(UpstreamError) as ctx:
            provider.complete([ChatMessage(role="user", content="hi")])
        self.assertEqual(ctx.exception.status_code, 502)

    def test_reply_without_text_block(self):
        provider = ClaudeProvider(
            model="claude-test",
            api_key="sk-test",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"content": []})),
        )
        with self.assertRaises(ParseError):
            provider.complete([ChatMessage(role="user", content="hi")])

    def test_missing_key(self):
        with self.assertRaises(LLMNotConfiguredError):
            ClaudeProvider(model="claude-test").complete([ChatMessage(role="user", content="hi")])


class OpenAIProviderTests(unittest.TestCase):
    def _provider(self, handler) -> OpenAIProvider:
        provider = OpenAIProvider(model="gpt-test", api_key="sk-test")
        provider._client = OpenAI(
            api_key="sk-test",
            base_url="https://llm.test/v1",
            max_retries=0,
            http_client=httpx.Client(transport=httpx.MockTransport(handler)),
        )
        return provider

    def test_text_reply(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={
                    "id": "chatcmpl-1",
                    "object": "chat.completion",
                    "created": 0,
                    "model": "gpt-test",
                    "choices": [
                        {"index": 0, "message": {"role": "assistant", "content": "hello"}, "finish_reason": "stop"}
                    ],
                },
            )

        provider = self._provider(handler)
        self.assertEqual(provider.complete([ChatMessage(role="user", content="hi")]), "hello")

    def test_status_error(self):
        provider = self._provider(lambda request: httpx.Response(429, json={"error": {"message": "slow down"}}))
        with self.assertRaises(UpstreamError) as ctx:
            provider.complete([ChatMessage(role="user", content="hi")])
        self.assertEqual(ctx.exception.status_code, 429)
        self.assertEqual(ctx.exception.message, "OpenAI API error")


class FactoryTests(unittest.TestCase):
    def test_selects_provider(self):
        claude = get_ai_client(Settings(ai_provider="claude", ai_model="claude-x"))
        self.assertIsInstance(claude, ClaudeProvider)
        self.assertEqual(claude.model, "claude-x")

        openai_client = get_ai_client(Settings(ai_provider="openai", ai_model="gpt-x", openai_api_key="k"))
        self.assertIsInstance(openai_client, OpenAIProvider)

        with self.assertRaises(ValueError):
            get_ai_client(Settings(ai_provider="gemini"))


if __name__ == "__main__":
    unittest.main()
