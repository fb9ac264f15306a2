"""Tests for peopledir/core/firebase.py - Firebase initialization."""

from unittest.mock import patch

from peopledir.core.firebase import init_firebase


def test_init_firebase_already_initialized():
    """Test init_firebase() does nothing if Firebase already initialized."""
    with (
        patch("peopledir.core.firebase.get_app") as mock_get_app,
        patch("peopledir.core.firebase.initialize_app") as mock_init,
    ):
        # get_app() succeeds, meaning Firebase is already initialized
        mock_get_app.return_value = "mock_app"

        init_firebase("people.appspot.com")

        mock_get_app.assert_called_once()
        mock_init.assert_not_called()


def test_init_firebase_with_bucket():
    """Test init_firebase() passes the storage bucket when initializing."""
    with (
        patch("peopledir.core.firebase.get_app") as mock_get_app,
        patch("peopledir.core.firebase.initialize_app") as mock_init,
    ):
        # get_app() raises ValueError, meaning Firebase is not initialized
        mock_get_app.side_effect = ValueError("Firebase app not initialized")

        init_firebase("people.appspot.com")

        mock_init.assert_called_once_with(
            options={"storageBucket": "people.appspot.com"}
        )


def test_init_firebase_without_bucket():
    """Test init_firebase() uses default options when no bucket is given."""
    with (
        patch("peopledir.core.firebase.get_app") as mock_get_app,
        patch("peopledir.core.firebase.initialize_app") as mock_init,
    ):
        mock_get_app.side_effect = ValueError("Firebase app not initialized")

        init_firebase()

        mock_init.assert_called_once_with(options=None)
