"""Streamlit Cloud entry point.

Deployments launch ``streamlit_app.py`` as the main module; the page itself
lives in :mod:`profile_app`, so we simply forward ``main`` here.
"""

from profile_app import main as profile_main


def main() -> None:
    """Invoke the profile page."""

    profile_main()


if __name__ == "__main__":  # pragma: no cover
    main()
