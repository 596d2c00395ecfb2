"""Tests for content_changelog.repositories.options."""

import pytest

from content_changelog.errors import InvalidArgumentError
from content_changelog.repositories import ChangeLogOptions, coerce_options


class TestCoerceOptions:
    def test_none(self) -> None:
        opts = coerce_options(None)
        assert opts == ChangeLogOptions()
        assert opts.limit is None
        assert opts.direction == "ASC"

    def test_mapping(self) -> None:
        opts = coerce_options({"contentid": 42, "id": 3, "limit": 10, "offset": 20,
                               "order": "date", "direction": "desc"})
        assert opts.contentid == 42
        assert opts.id == 3
        assert opts.limit == 10
        assert opts.offset == 20
        assert opts.order == "date"
        assert opts.direction == "DESC"

    def test_model_passes_through(self) -> None:
        opts = ChangeLogOptions(limit=5)
        assert coerce_options(opts) is opts

    @pytest.mark.parametrize("key", ["contentId", "content_id", "contenttype", "page"])
    def test_unknown_keys_rejected(self, key: str) -> None:
        with pytest.raises(InvalidArgumentError):
            coerce_options({"limit": 3, key: 42})

    def test_null_direction_defaults(self) -> None:
        assert coerce_options({"direction": None}).direction == "ASC"

    @pytest.mark.parametrize(
        "options",
        [
            {"direction": "UP"},
            {"limit": -1},
            {"offset": -5},
            {"contentid": "forty-two"},
            ["limit", 10],
        ],
    )
    def test_invalid(self, options) -> None:
        with pytest.raises(InvalidArgumentError):
            coerce_options(options)

    def test_without_paging(self) -> None:
        opts = ChangeLogOptions(contentid=1, limit=5, offset=10, order="date")
        stripped = opts.without_paging()
        assert stripped.limit is None
        assert stripped.offset is None
        assert stripped.contentid == 1
        assert stripped.order == "date"
