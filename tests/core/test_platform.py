import sys
import unittest
from unittest.mock import patch

from jbangop.core.platform import StaticPlatform, SystemPlatform, is_linux, is_macos, is_windows


class TestPlatformDetection(unittest.TestCase):
    def _flags(self, name):
        p = StaticPlatform(name)
        return is_linux(p), is_macos(p), is_windows(p)

    def test_linux_names(self) -> None:
        self.assertEqual(self._flags("Linux"), (True, False, False))
        self.assertEqual(self._flags("UNIX"), (True, False, False))

    def test_macos_names(self) -> None:
        for name in ("Mac OS X", "OSX"):
            self.assertEqual(self._flags(name), (False, True, False), name)
        self.assertTrue(is_macos(StaticPlatform("darwin")))

    def test_windows_names(self) -> None:
        for name in ("Windows", "Windows 11", "WINDOWS SERVER 2022"):
            self.assertEqual(self._flags(name), (False, False, True), name)

    def test_absent_os_name_reports_nothing(self) -> None:
        self.assertEqual(self._flags(None), (False, False, False))

    def test_predicates_are_independent(self) -> None:
        self.assertEqual(self._flags("darwin"), (False, True, True))
        self.assertEqual(self._flags("win-unix"), (True, False, True))

    def test_system_platform_reports_darwin_as_mac_os_x(self) -> None:
        with patch("jbangop.core.platform.platform.system", return_value="Darwin"):
            self.assertEqual(SystemPlatform().os_name(), "Mac OS X")
            self.assertTrue(is_macos())
            self.assertFalse(is_windows())

    def test_system_platform_empty_name_is_absent(self) -> None:
        with patch("jbangop.core.platform.platform.system", return_value=""):
            self.assertIsNone(SystemPlatform().os_name())
            self.assertFalse(is_linux())
            self.assertFalse(is_macos())
            self.assertFalse(is_windows())

    @unittest.skipUnless(sys.platform.startswith("linux"), "Linux only")
    def test_is_linux_on_linux(self) -> None:
        self.assertTrue(is_linux())
        self.assertFalse(is_macos())
        self.assertFalse(is_windows())

    @unittest.skipUnless(sys.platform == "darwin", "macOS only")
    def test_is_macos_on_macos(self) -> None:
        self.assertTrue(is_macos())
        self.assertFalse(is_linux())

    @unittest.skipUnless(sys.platform == "win32", "Windows only")
    def test_is_windows_on_windows(self) -> None:
        self.assertTrue(is_windows())
        self.assertFalse(is_linux())
        self.assertFalse(is_macos())


if __name__ == "__main__":
    unittest.main()
