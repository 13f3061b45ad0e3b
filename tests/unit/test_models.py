import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "downloading"))

from pie_downloading.models import Package


class PackageTests(unittest.TestCase):
    def test_from_repo(self):
        package = Package.from_repo("xdebug/xdebug", name="xdebug", version="3.3.0")
        self.assertEqual(package.github_org_and_repository, "xdebug/xdebug")
        self.assertEqual(package.reference_download_url, "https://github.com/xdebug/xdebug/archive/3.3.0.zip")

    def test_from_repo_rejects_bad_slug(self):
        for repo in ("xdebug", "a/b/c", "/xdebug"):
            with self.assertRaises(ValueError):
                Package.from_repo(repo, name="x", version="1")


if __name__ == "__main__":
    unittest.main()
