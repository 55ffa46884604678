"""
Tests for the service launcher
"""
from unittest.mock import patch

import app as launcher
from matcher import app as matcher_app
from tracker import app as tracker_app


def test_tracker_runs_without_debug():
    with patch.object(tracker_app, "run") as run:
        launcher.main(["tracker"])

    run.assert_called_once_with(host="0.0.0.0", port=tracker_app.config['PORT'], debug=False)


def test_matcher_runs_without_debug():
    with patch.object(matcher_app, "run") as run:
        launcher.main(["matcher"])

    run.assert_called_once_with(host="0.0.0.0", port=matcher_app.config['PORT'], debug=False)
