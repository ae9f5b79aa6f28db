import unittest

from tests.fakes import LEGACY_PROFILE, PROFILE, RESUME_TEXT, FakeAIClient, make_client


class ProfileApiTests(unittest.TestCase):
    def setUp(self):
        self.fake = FakeAIClient(PROFILE)
        self.client = make_client(self.fake)
        response = self.client.put("/api/profile/u1", json=PROFILE)
        self.assertEqual(response.status_code, 200)

    def test_save_and_load(self):
        saved = self.client.put("/api/profile/u1", json=PROFILE).json()
        self.assertEqual(saved["state"], "saved")
        self.assertEqual(saved["warnings"], [])
        self.assertTrue(saved["profile"]["updatedAt"])

        response = self.client.get("/api/profile/u1")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["personalInfo"]["lastName"], "Doe")
        self.assertEqual(body["schemaVersion"], 2)
        self.assertEqual(body["skills"]["technical"], ["Go", "PostgreSQL"])

        cached = self.client.get("/api/profile/u1/cached")
        self.assertEqual(cached.status_code, 200)
        self.assertEqual(cached.json()["personalInfo"]["email"], "jane@x.com")

    def test_legacy_profile_is_upgraded_on_save(self):
        response = self.client.put("/api/profile/legacy", json=LEGACY_PROFILE)
        self.assertEqual(response.status_code, 200)
        profile = response.json()["profile"]
        self.assertEqual(profile["personalInfo"]["firstName"], "Jane")
        self.assertEqual(profile["onlinePresence"]["linkedin"], "https://linkedin.com/in/janedoe")
        self.assertEqual(profile["certifications"][0]["name"], "CKA")
        self.assertEqual(profile["workExperience"][0]["endDate"], "")

    def test_unknown_schema_version(self):
        response = self.client.put("/api/profile/u1", json={"schemaVersion": 7})
        self.assertEqual(response.status_code, 422)

    def test_missing_profile(self):
        self.assertEqual(self.client.get("/api/profile/nobody").status_code, 404)
        response = self.client.patch("/api/profile/nobody/personal-info", json={"firstName": "X"})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "Profile not found"})

    def test_delete(self):
        response = self.client.delete("/api/profile/u1")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.client.get("/api/profile/u1").status_code, 404)
        self.assertEqual(self.client.get("/api/profile/u1/cached").status_code, 404)
        self.assertEqual(self.client.delete("/api/profile/u1").status_code, 404)

    def test_removing_last_work_experience_is_refused(self):
        response = self.client.delete("/api/profile/u1/sections/workExperience/0")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["warnings"], ["You must have at least one work experience"])
        self.assertEqual(body["state"], "editing")
        self.assertEqual(len(body["profile"]["workExperience"]), 1)

        stored = self.client.get("/api/profile/u1").json()
        self.assertEqual(len(stored["workExperience"]), 1)

    def test_add_and_remove_section_entries(self):
        added = self.client.post("/api/profile/u1/sections/workExperience").json()
        self.assertEqual(added["state"], "saved")
        self.assertEqual(len(added["profile"]["workExperience"]), 2)
        self.assertEqual(added["profile"]["workExperience"][1]["achievements"], [""])
        self.assertIn("Work experience #2: add at least one achievement.", added["warnings"])

        updated = self.client.patch(
            "/api/profile/u1/sections/workExperience/1",
            json={"company": "Initech", "employmentType": "contract", "current": True, "endDate": "2020-01"},
        ).json()
        entry = updated["profile"]["workExperience"][1]
        self.assertEqual(entry["company"], "Initech")
        self.assertEqual(entry["employmentType"], "Contract")
        self.assertEqual(entry["endDate"], "")

        removed = self.client.delete("/api/profile/u1/sections/workExperience/1").json()
        self.assertEqual(removed["warnings"], [])
        self.assertEqual(len(removed["profile"]["workExperience"]), 1)

        certification = self.client.post(
            "/api/profile/u1/sections/certifications",
            json={"name": "CKA", "issuingOrganization": "CNCF"},
        ).json()
        self.assertEqual(certification["profile"]["certifications"][0]["issuingOrganization"], "CNCF")

    def test_unknown_section_and_index(self):
        self.assertEqual(self.client.post("/api/profile/u1/sections/hobbies").status_code, 400)
        self.assertEqual(self.client.delete("/api/profile/u1/sections/education/5").status_code, 400)

    def test_achievements(self):
        added = self.client.post(
            "/api/profile/u1/experience/0/achievements",
            json={"text": "Cut p99 latency by 30%"},
        ).json()
        self.assertEqual(added["profile"]["workExperience"][0]["achievements"][-1], "Cut p99 latency by 30%")

        updated = self.client.put(
            "/api/profile/u1/experience/0/achievements/1",
            json={"text": "Cut p99 latency by 35%"},
        ).json()
        self.assertEqual(updated["profile"]["workExperience"][0]["achievements"][1], "Cut p99 latency by 35%")

        removed = self.client.delete("/api/profile/u1/experience/0/achievements/0").json()
        self.assertEqual(removed["profile"]["workExperience"][0]["achievements"], ["Cut p99 latency by 35%"])

    def test_scalar_fields(self):
        info = self.client.patch("/api/profile/u1/personal-info", json={"phone": "+49 30 1234"}).json()
        self.assertEqual(info["profile"]["personalInfo"]["phone"], "+49 30 1234")
        self.assertEqual(info["profile"]["personalInfo"]["firstName"], "Jane")

        address = self.client.patch("/api/profile/u1/address", json={"state": "BE"}).json()
        self.assertEqual(address["profile"]["personalInfo"]["address"]["city"], "Berlin")
        self.assertEqual(address["profile"]["personalInfo"]["address"]["state"], "BE")

        online = self.client.patch("/api/profile/u1/online-presence", json={"github": "https://github.com/jd"}).json()
        self.assertEqual(online["profile"]["onlinePresence"]["github"], "https://github.com/jd")

        summary = self.client.put("/api/profile/u1/summary", json={"text": "Builds reliable systems."}).json()
        self.assertEqual(summary["profile"]["professionalSummary"], "Builds reliable systems.")

    def test_comma_separated_lists(self):
        skills = self.client.put("/api/profile/u1/skills/technical", json={"value": "Go, Rust , ,Python"}).json()
        self.assertEqual(skills["profile"]["skills"]["technical"], ["Go", "Rust", "Python"])

        tech = self.client.put("/api/profile/u1/projects/0/technologies", json={"value": "FastAPI, SQLite"}).json()
        self.assertEqual(tech["profile"]["projects"][0]["technologies"], ["FastAPI", "SQLite"])

        self.assertEqual(
            self.client.put("/api/profile/u1/skills/languages", json={"value": "Go"}).status_code,
            400,
        )

    def test_import_from_text(self):
        response = self.client.post("/api/profile/u2/import", json={"resumeText": RESUME_TEXT, "save": True})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["state"], "saved")
        self.assertEqual(body["profile"]["personalInfo"]["firstName"], "Jane")
        self.assertEqual(self.client.get("/api/profile/u2").status_code, 200)

    def test_import_without_save_stays_editing(self):
        response = self.client.post("/api/profile/u3/import", json={"resumeText": RESUME_TEXT})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["state"], "editing")
        self.assertEqual(self.client.get("/api/profile/u3").status_code, 404)

    def test_import_failure(self):
        client = make_client(FakeAIClient("I could not read that"))
        response = client.post("/api/profile/u4/import", json={"resumeText": RESUME_TEXT, "save": True})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["error"], "AI parsing failed. Please try again.")


if __name__ == "__main__":
    unittest.main()
