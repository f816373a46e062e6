"""
Tests for application configuration.

Run with: python -m pytest tests/test_config.py -v
"""

from config import Config, TestConfig


class TestConfigSettings:

    def test_settings_are_the_ones_the_app_reads(self):
        settings = {name for name in vars(Config) if name.isupper()}
        assert settings == {
            'SECRET_KEY',
            'SQLALCHEMY_DATABASE_URI',
            'SQLALCHEMY_TRACK_MODIFICATIONS',
            'PERMANENT_SESSION_LIFETIME',
            'LOG_LEVEL',
            'VCF_MAX_FILE_SIZE',
            'DEFAULT_LANGUAGE',
        }

    def test_test_config_uses_in_memory_database(self):
        assert TestConfig.TESTING is True
        assert TestConfig.SQLALCHEMY_DATABASE_URI == 'sqlite://'
        assert TestConfig.VCF_MAX_FILE_SIZE == Config.VCF_MAX_FILE_SIZE

    def test_app_picks_up_config(self, app):
        assert app.config['DEFAULT_LANGUAGE'] == Config.DEFAULT_LANGUAGE
        assert 'FLASK_ENV' not in app.config
