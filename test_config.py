#!/usr/bin/env python3
"""
Unit tests for the environment driven application config
"""

import os
import sys
import importlib
import unittest
from unittest import mock

# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import config


class TestConfig(unittest.TestCase):
    """Test cases for config.get_config"""

    def tearDown(self):
        # Settings are read at import time, reload with the real environment
        importlib.reload(config)

    def reload_with(self, env):
        with mock.patch.dict(os.environ, env, clear=False):
            for name in ('LOG_LEVEL', 'DIFF_OUTPUT_FORMAT', 'IMG_COMPARE_ENV'):
                if name not in env:
                    os.environ.pop(name, None)
            importlib.reload(config)
            return config.get_config()

    def test_default_config(self):
        selected = self.reload_with({})
        self.assertIs(selected, config.Config)
        self.assertEqual(selected.LOG_LEVEL, 'WARNING')
        self.assertEqual(selected.DIFF_OUTPUT_FORMAT, 'TGA')

    def test_development_config_logs_debug(self):
        selected = self.reload_with({'IMG_COMPARE_ENV': 'development'})
        self.assertIs(selected, config.DevelopmentConfig)
        self.assertEqual(selected.LOG_LEVEL, 'DEBUG')

    def test_production_config(self):
        selected = self.reload_with({'IMG_COMPARE_ENV': 'production'})
        self.assertIs(selected, config.ProductionConfig)
        self.assertEqual(selected.LOG_LEVEL, 'WARNING')

    def test_unknown_environment_uses_default(self):
        selected = self.reload_with({'IMG_COMPARE_ENV': 'staging'})
        self.assertIs(selected, config.Config)

    def test_environment_overrides(self):
        selected = self.reload_with({'IMG_COMPARE_ENV': 'development',
                                     'LOG_LEVEL': 'info',
                                     'DIFF_OUTPUT_FORMAT': 'png'})
        self.assertEqual(selected.LOG_LEVEL, 'INFO')
        self.assertEqual(selected.DIFF_OUTPUT_FORMAT, 'PNG')


if __name__ == '__main__':
    unittest.main()
