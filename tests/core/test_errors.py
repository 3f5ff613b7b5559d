import unittest

from jbangop.core.errors import EXIT_FAILURE, EXIT_SUCCESS, ExitStatusError, JBangError, raise_on_failure


class TestExitStatusError(unittest.TestCase):
    def test_defaults_to_failure_status(self) -> None:
        e = ExitStatusError(code="project.missing", message="A project must be specified.")
        self.assertEqual(e.status, EXIT_FAILURE)
        self.assertIsInstance(e, JBangError)
        self.assertEqual(str(e), "project.missing: A project must be specified.")

    def test_raise_on_failure_ignores_success(self) -> None:
        raise_on_failure(EXIT_SUCCESS)

    def test_raise_on_failure_carries_status(self) -> None:
        with self.assertRaises(ExitStatusError) as cm:
            raise_on_failure(42)
        self.assertEqual(cm.exception.status, 42)
        self.assertEqual(cm.exception.code, "process.failed")
        self.assertEqual(cm.exception.data, {"status": 42})


if __name__ == "__main__":
    unittest.main()
