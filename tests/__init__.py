"""Test package for ChatPDFy.

Structure:
    - unit/: Individual function and class tests
    - integration/: API tests against the app running in process

PDFs are built in memory by tests/helpers.py and parsed with pypdf.
Leverages pytest with pytest-check for soft assertions.
"""
