"""Shared fixtures for the ClearLine test-suite."""

from __future__ import annotations

import pytest

from clearline.rewrite import RewriteOptions


BASE_OPTIONS = RewriteOptions(
    active_voice=True,
    clear_ownership=True,
    sharper_impact=True,
    calm_tone=True,
    concise=True,
    audit_safe_mode=True,
    owner="Operations",
    document_type="audit-finding",
    english_variant="en-GB",
    standardise_spelling=True,
)

QUIET_OPTIONS = RewriteOptions(
    active_voice=False,
    clear_ownership=False,
    sharper_impact=False,
    calm_tone=False,
    concise=False,
    audit_safe_mode=False,
    owner=None,
    document_type="status-update",
    english_variant="en-US",
    standardise_spelling=False,
)


@pytest.fixture(name="options")
def options_fixture() -> RewriteOptions:
    """Audit-finding options with every toggle on and an owner set."""
    return BASE_OPTIONS


@pytest.fixture(name="quiet_options")
def quiet_options_fixture() -> RewriteOptions:
    """Options with every optional stage switched off."""
    return QUIET_OPTIONS

