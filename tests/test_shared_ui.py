import unittest
from pathlib import Path

from utils.shared_ui import DASHBOARD_PAGE_PATH, PAGE_LINKS


ROOT = Path(__file__).resolve().parents[1]


class TestLandingPageLinks(unittest.TestCase):
    def test_every_link_points_at_a_page_file(self):
        for path, label, _icon, _blurb in PAGE_LINKS:
            with self.subTest(label=label):
                self.assertTrue((ROOT / path).is_file(), path)

    def test_every_page_is_linked(self):
        linked = {path for path, *_ in PAGE_LINKS}
        pages = {f"pages/{p.name}" for p in (ROOT / "pages").glob("*.py")}
        self.assertEqual(linked, pages)

    def test_entry_point_does_not_render_the_dashboard(self):
        source = (ROOT / "streamlit_app.py").read_text(encoding="utf-8")
        self.assertIn("render_landing", source)
        self.assertNotIn("render_dashboard", source)
        self.assertIn(DASHBOARD_PAGE_PATH, {path for path, *_ in PAGE_LINKS})


if __name__ == "__main__":
    unittest.main()
