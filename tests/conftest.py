"""Pytest configuration and shared fixtures for the scidoc test suite.

This module provides shared fixtures, test configuration, and raw node data
builders used across the unit and integration tests.
"""

import os
from typing import Any

import pytest
from hypothesis import Phase, Verbosity, settings

from scidoc.ast import NodeFactory

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")


def text(content: str, **extra: Any) -> dict[str, Any]:
    """Raw text token."""
    return {"type": "text", "content": content, **extra}


@pytest.fixture
def factory() -> NodeFactory:
    """Provide a node factory with no excluded kinds.

    Returns
    -------
    NodeFactory
        Fresh factory instance.

    """
    return NodeFactory()


@pytest.fixture
def section_data() -> dict[str, Any]:
    """Provide raw data for a section with text, a reference and more text.

    Returns
    -------
    dict
        Section token titled "Introduction".

    """
    return {
        "type": "section",
        "id": "sec",
        "level": 1,
        "title": [text("Introduction")],
        "content": [
            text("This is shown in Figure "),
            {"type": "ref", "content": ["fig:1"]},
            text(" and discussed below."),
        ],
    }


@pytest.fixture
def paper_data() -> list[dict[str, Any]]:
    """Provide a small paper: abstract, two sections, an equation, a figure and a bibliography.

    Returns
    -------
    list[dict]
        Top-level raw tokens.

    """
    return [
        {
            "type": "abstract",
            "id": "abs",
            "content": [text("We study the spectral properties of sparse random graphs.")],
        },
        {
            "type": "section",
            "id": "intro",
            "level": 1,
            "numbering": "1",
            "labels": ["sec:intro"],
            "title": [text("Introduction")],
            "content": [
                text("Random graphs were introduced by Erdos and Renyi "),
                {"type": "citation", "content": ["erdos59"]},
                text(". Their adjacency spectra concentrate around a semicircle law."),
                {
                    "type": "equation",
                    "id": "eq1",
                    "display": "block",
                    "numbering": "1",
                    "labels": ["eq:semicircle"],
                    "content": "\\rho(x) = \\frac{1}{2\\pi}\\sqrt{4 - x^2}",
                },
            ],
        },
        {
            "type": "figure",
            "id": "fig",
            "numbering": "1",
            "labels": ["fig:spectrum"],
            "content": [
                {"type": "includegraphics", "path": "spectrum.png"},
                {"type": "caption", "numbering": "1", "content": [text("Empirical spectral density.")]},
            ],
        },
        {
            "type": "bibliography",
            "id": "bib",
            "content": [
                {
                    "type": "bibitem",
                    "key": "erdos59",
                    "content": "P. Erdos and A. Renyi. On random graphs I. Publ. Math. Debrecen, 1959.",
                }
            ],
        },
    ]
