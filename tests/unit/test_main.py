"""Unit tests for the process entry point."""

from unittest.mock import patch

import inquiry_analyst.main as main_module


class TestMain:
    """Tests for run mode selection."""

    def test_integrated_by_default(self) -> None:
        with (
            patch.dict("os.environ", {}, clear=True),
            patch.object(main_module, "run_integrated") as integrated,
            patch.object(main_module, "run_separate") as separate,
        ):
            main_module.main()

        integrated.assert_called_once()
        separate.assert_not_called()

    def test_separate_mode(self) -> None:
        with (
            patch.dict("os.environ", {"RUN_MODE": "Separate"}, clear=True),
            patch.object(main_module, "run_integrated") as integrated,
            patch.object(main_module, "run_separate") as separate,
        ):
            main_module.main()

        separate.assert_called_once()
        integrated.assert_not_called()


class TestChildEnvironment:
    """Tests for the environment passed to the page process."""

    def test_points_page_at_api_port(self) -> None:
        with patch.dict("os.environ", {"PORT": "9000"}, clear=True):
            env = main_module.child_environment()

        assert env["API_BASE_URL"] == "http://localhost:9000"

    def test_keeps_explicit_api_url(self) -> None:
        env_vars = {"API_BASE_URL": "http://api.internal:8000"}
        with patch.dict("os.environ", env_vars, clear=True):
            env = main_module.child_environment()

        assert env["API_BASE_URL"] == "http://api.internal:8000"
