"""Shared fixtures for the xtemplate test suite.

``components_dir`` writes a small library of component templates to a
temporary folder, and ``reset_package_logger`` undoes the handler changes
made by the CLI's ``setup_logging`` so ``caplog`` keeps seeing records.
"""

from __future__ import annotations

import collections.abc as cabc
import logging
from pathlib import Path

import pytest

from xtemplate.components import MappingComponentLoader

COMPONENT_TEMPLATES: dict[str, str] = {
    "card": '<div class="card">{{block "#slot--body" .}}empty card{{end}}</div>\n',
    "article": '<article>{{block "#slot--default" .}}{{end}}</article>\n',
    "box": '<b>{{block "#slot--default" .}}empty box{{end}}</b>',
    "panel": (
        '<section>{{block "#slot--title" .}}Untitled{{end}}'
        '{{block "#slot--body" .}}{{end}}</section>'
    ),
}


@pytest.fixture(autouse=True)
def reset_package_logger() -> cabc.Iterator[None]:
    """Restore the ``xtemplate`` logger after each test."""
    logger = logging.getLogger("xtemplate")
    saved = (logger.handlers[:], logger.level, logger.propagate)
    yield
    logger.handlers, logger.level, logger.propagate = saved


@pytest.fixture
def components_dir(tmp_path: Path) -> Path:
    """Write :data:`COMPONENT_TEMPLATES` under ``tmp_path/_components``.

    Returns
    -------
    Path
        Folder holding one ``{type}.html`` file per component.
    """
    folder = tmp_path / "_components"
    folder.mkdir()
    for name, content in COMPONENT_TEMPLATES.items():
        (folder / f"{name}.html").write_text(content, encoding="utf-8")
    return folder


@pytest.fixture
def mapping_loader() -> MappingComponentLoader:
    """Serve :data:`COMPONENT_TEMPLATES` from memory."""
    return MappingComponentLoader(COMPONENT_TEMPLATES)
