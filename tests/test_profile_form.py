import tempfile
import unittest
from pathlib import Path

from resume_tailor.core.errors import FormStateError, ValidationError
from resume_tailor.editor.profile_form import ProfileForm
from resume_tailor.schemas.migration import upgrade_profile
from resume_tailor.store.profile_store import ProfileStore
from tests.fakes import PROFILE


class ProfileFormLifecycleTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.store = ProfileStore(str(Path(self.tmp.name) / "profiles.db"), str(Path(self.tmp.name) / "cache"))

    def tearDown(self):
        self.store.close()
        self.tmp.cleanup()

    def test_upload_parse_edit_save(self):
        form = ProfileForm()
        self.assertEqual(form.state, "uploading")

        form.begin_parsing()
        self.assertEqual(form.state, "parsing")

        form.load_parsed(upgrade_profile(PROFILE))
        self.assertEqual(form.state, "editing")
        self.assertEqual(form.profile.personal_info.first_name, "Jane")

        form.save(self.store, "u1")
        self.assertEqual(form.state, "saved")
        self.assertIsNotNone(self.store.get_profile("u1"))

        form.set_summary("Edited after saving.")
        self.assertEqual(form.state, "editing")

    def test_failed_parse_returns_to_uploading(self):
        form = ProfileForm()
        form.begin_parsing()
        form.parse_failed()
        self.assertEqual(form.state, "uploading")

    def test_blank_start_has_mandatory_entries(self):
        form = ProfileForm()
        form.start_blank()
        self.assertEqual(form.state, "editing")
        self.assertEqual(len(form.profile.work_experience), 1)
        self.assertEqual(len(form.profile.education), 1)

    def test_invalid_transitions(self):
        form = ProfileForm()
        with self.assertRaises(FormStateError):
            form.save(self.store, "u1")
        with self.assertRaises(FormStateError):
            form.set_summary("too early")

        form.begin_parsing()
        with self.assertRaises(FormStateError):
            form.begin_parsing()
        with self.assertRaises(FormStateError):
            form.add_entry("education")

    def test_form_works_on_a_copy(self):
        profile = upgrade_profile(PROFILE)
        form = ProfileForm.editing(profile)
        form.set_summary("changed")
        self.assertEqual(profile.professional_summary, "Backend engineer focused on distributed systems.")


class ProfileFormEditingTests(unittest.TestCase):
    def setUp(self):
        self.form = ProfileForm.editing(upgrade_profile(PROFILE))

    def test_mandatory_sections_keep_one_entry(self):
        for section, message in (
            ("workExperience", "You must have at least one work experience"),
            ("education", "You must have at least one education entry"),
        ):
            warnings = self.form.remove_entry(section, 0)
            self.assertEqual(warnings, [message])
        self.assertEqual(len(self.form.profile.work_experience), 1)
        self.assertEqual(len(self.form.profile.education), 1)

    def test_optional_sections_can_be_emptied(self):
        self.assertEqual(self.form.remove_entry("languages", 0), [])
        self.assertEqual(self.form.profile.languages, [])

    def test_add_update_remove_entry(self):
        self.form.add_entry("education", {"institution": "MIT", "degree": "MSc"})
        self.assertEqual(self.form.profile.education[1].institution, "MIT")

        self.form.update_entry("education", 1, {"fieldOfStudy": "EECS"})
        self.assertEqual(self.form.profile.education[1].field_of_study, "EECS")
        self.assertEqual(self.form.profile.education[1].degree, "MSc")

        self.form.remove_entry("education", 0)
        self.assertEqual([edu.institution for edu in self.form.profile.education], ["MIT"])

    def test_new_work_experience_has_one_empty_achievement(self):
        self.form.add_entry("workExperience")
        self.assertEqual(self.form.profile.work_experience[-1].achievements, [""])

    def test_invalid_entries(self):
        with self.assertRaises(ValidationError):
            self.form.add_entry("hobbies")
        with self.assertRaises(ValidationError):
            self.form.update_entry("education", 9, {"degree": "PhD"})
        with self.assertRaises(ValidationError):
            self.form.add_entry("workExperience", {"current": "sometimes"})

    def test_achievements(self):
        self.form.add_achievement(0, "Mentored four engineers")
        self.form.update_achievement(0, 0, "Built Go services")
        self.assertEqual(
            self.form.profile.work_experience[0].achievements,
            ["Built Go services", "Mentored four engineers"],
        )
        self.form.remove_achievement(0, 1)
        self.assertEqual(self.form.profile.work_experience[0].achievements, ["Built Go services"])
        with self.assertRaises(ValidationError):
            self.form.remove_achievement(0, 4)

    def test_skill_and_technology_text(self):
        self.form.set_skills("soft", "Mentoring,  Writing ,")
        self.assertEqual(self.form.profile.skills.soft, ["Mentoring", "Writing"])
        self.form.set_project_technologies(0, "")
        self.assertEqual(self.form.profile.projects[0].technologies, [])
        with self.assertRaises(ValidationError):
            self.form.set_skills("hard", "Go")

    def test_review_hints(self):
        self.form.update_entry("workExperience", 0, {"current": False, "endDate": "", "achievements": [" "]})
        warnings = self.form.review()
        self.assertEqual(
            warnings,
            [
                "Senior Software Engineer: add an end date or mark the role as current.",
                "Senior Software Engineer: add at least one achievement.",
            ],
        )


if __name__ == "__main__":
    unittest.main()
