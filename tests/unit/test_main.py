#!/usr/bin/env python3
"""
Entry Point Unit Tests

Command-line parsing, overrides and exit codes of main(), with uvicorn
and logging setup patched out.
"""

import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import Mock, patch

from parking_capacity.infrastructure.config import CONFIG_ENV_VAR, ConfigurationError, ParkingSettings
from parking_capacity.main import apply_overrides, main, parse_args


class TestParseArgs(unittest.TestCase):

    def test_defaults(self):
        args = parse_args([])
        self.assertIsNone(args.config)
        self.assertIsNone(args.host)
        self.assertIsNone(args.port)
        self.assertIsNone(args.seed)

    def test_overrides(self):
        settings = apply_overrides(
            ParkingSettings(),
            parse_args(["--host", "127.0.0.1", "--port", "9000", "--seed", "3"])
        )
        self.assertEqual(settings.server.host, "127.0.0.1")
        self.assertEqual(settings.server.port, 9000)
        self.assertEqual(settings.seeding.random_seed, 3)
        self.assertEqual(settings.seeding.two_wheeler_range, (5, 30))

    def test_out_of_range_port_rejected(self):
        for port in ("70000", "0"):
            with self.assertRaises(ConfigurationError, msg=port):
                apply_overrides(ParkingSettings(), parse_args(["--port", port]))


class TestMain(unittest.TestCase):

    def setUp(self):
        env = patch.dict(os.environ, {}, clear=True)
        env.start()
        self.addCleanup(env.stop)

        run = patch("parking_capacity.main.uvicorn.run")
        self.run = run.start()
        self.addCleanup(run.stop)

        setup = patch("parking_capacity.main.setup_logging", return_value=Mock())
        self.setup_logging = setup.start()
        self.addCleanup(setup.stop)

    def tearDown(self):
        root = logging.getLogger()
        for handler in root.handlers[:]:
            handler.close()
            root.removeHandler(handler)
        root.setLevel(logging.WARNING)

    def test_serves_with_overrides(self):
        exit_code = main(["--host", "127.0.0.1", "--port", "9001", "--seed", "3"])

        self.assertEqual(exit_code, 0)
        self.run.assert_called_once()
        app = self.run.call_args[0][0]
        self.assertEqual(self.run.call_args[1]["host"], "127.0.0.1")
        self.assertEqual(self.run.call_args[1]["port"], 9001)
        self.assertEqual(app.state.parking_service.repository.seeding.random_seed, 3)
        self.setup_logging.assert_called_once()

    def test_invalid_port_exits_with_error(self):
        self.assertEqual(main(["--port", "70000", "--seed", "3"]), 1)
        self.run.assert_not_called()

    def test_port_zero_is_not_ignored(self):
        self.assertEqual(main(["--port", "0"]), 1)
        self.run.assert_not_called()

    def test_missing_config_exits_with_error(self):
        self.assertEqual(main(["--config", "/nonexistent/parking.yaml"]), 1)
        self.run.assert_not_called()

    def test_config_file_from_environment(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "parking.yaml"
            path.write_text("server:\n  port: 9090\nseeding:\n  enabled: false\n", encoding="utf-8")
            os.environ[CONFIG_ENV_VAR] = str(path)

            self.assertEqual(main([]), 0)

        self.assertEqual(self.run.call_args[1]["port"], 9090)
        repository = self.run.call_args[0][0].state.parking_service.repository
        self.assertEqual(repository.count_available(), 640)


if __name__ == '__main__':
    unittest.main()
