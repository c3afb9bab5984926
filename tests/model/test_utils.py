"""Unit tests for model utilities."""

import logging
import os

import numpy as np

from heightmesh.model.utils import (
    StructuredLogger,
    ensure_directory_exists,
    validate_faces,
    validate_vertices
)


class TestStructuredLogger:
    """Tests for the structured logger."""

    def test_context_is_appended_as_json(self, caplog):
        log = StructuredLogger("heightmesh.tests.structured")
        with caplog.at_level(logging.INFO, logger="heightmesh.tests.structured"):
            log.info("Merge pass complete", width=3, rectangles=1)

        assert caplog.records[-1].getMessage() == 'Merge pass complete | {"rectangles": 1, "width": 3}'

    def test_plain_message(self, caplog):
        log = StructuredLogger("heightmesh.tests.structured")
        with caplog.at_level(logging.WARNING, logger="heightmesh.tests.structured"):
            log.warning("No context")
            log.debug("Filtered out", detail=1)

        assert [r.getMessage() for r in caplog.records] == ["No context"]


class TestValidation:
    """Tests for vertex and face validation helpers."""

    def test_validate_vertices(self):
        assert validate_vertices(np.zeros((4, 3)))
        assert validate_vertices([])
        assert not validate_vertices(None)
        assert not validate_vertices(np.zeros((4, 2)))
        assert not validate_vertices([[0.0, np.nan, 0.0]])

    def test_validate_faces(self):
        assert validate_faces(np.array([[0, 1, 2]]), 3)
        assert validate_faces([], 0)
        assert not validate_faces(None, 3)
        assert not validate_faces(np.array([[0, 1, 3]]), 3)
        assert not validate_faces(np.array([[0, 1]]), 3)

    def test_ensure_directory_exists(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "mesh.obj"
        assert ensure_directory_exists(str(path))
        assert os.path.isdir(tmp_path / "nested" / "dir")
