"""Tests for :func:`showcase.review.init_app`."""

from unittest import TestCase

from flask import Flask

from .. import init_app, config


class TestInitApp(TestCase):
    """Configuration defaults are set on the application."""

    def test_defaults(self):
        """Defaults come from :mod:`.config`."""
        app = Flask('test')
        init_app(app)
        self.assertEqual(app.config['STAFF_VOTING_THRESHOLD'],
                         config.STAFF_VOTING_THRESHOLD)
        self.assertEqual(app.config['STORE_LOAD_RETRIES'],
                         config.STORE_LOAD_RETRIES)

    def test_explicit_values_win(self):
        """Values that are already set are not overwritten."""
        app = Flask('test')
        app.config['VETERANS_VOTING_THRESHOLD'] = 7
        init_app(app)
        self.assertEqual(app.config['VETERANS_VOTING_THRESHOLD'], 7)
