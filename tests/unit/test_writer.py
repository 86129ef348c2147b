"""
Unit tests for writing output units.
"""

import pytest

from strapi_ts.core.generator import OutputUnit
from strapi_ts.writer import WriteError, write_units


class TestWriteUnits:
    """Test persisting units below an output folder."""

    def test_writes_nested_paths(self, tmp_path):
        units = [
            OutputUnit("article", "export interface Article {}\n"),
            OutputUnit("layout/hero", "export interface LayoutHero {}\n"),
            OutputUnit("index", "export * from './article';\n"),
        ]

        written = write_units(units, tmp_path / "types")

        assert written == [
            tmp_path / "types/article.ts",
            tmp_path / "types/layout/hero.ts",
            tmp_path / "types/index.ts",
        ]
        assert (tmp_path / "types/layout/hero.ts").read_text(encoding="utf-8") == (
            "export interface LayoutHero {}\n"
        )

    def test_overwrites_existing(self, tmp_path):
        target = tmp_path / "tag.ts"
        target.write_text("old", encoding="utf-8")

        write_units([OutputUnit("tag", "new\n")], tmp_path)

        assert target.read_text(encoding="utf-8") == "new\n"

    def test_output_dir_is_a_file(self, tmp_path):
        blocker = tmp_path / "types"
        blocker.write_text("", encoding="utf-8")

        with pytest.raises(WriteError, match="Cannot create output directory"):
            write_units([OutputUnit("tag", "x\n")], blocker)

    def test_unit_folder_is_a_file(self, tmp_path):
        (tmp_path / "layout").write_text("", encoding="utf-8")
        units = [OutputUnit("tag", "x\n"), OutputUnit("layout/hero", "y\n")]

        with pytest.raises(WriteError, match="Error writing"):
            write_units(units, tmp_path)

        assert (tmp_path / "tag.ts").exists()

    @pytest.mark.parametrize("path", ["/hero", "../hero", "layout/../../hero"])
    def test_unit_outside_output_dir(self, tmp_path, path):
        out = tmp_path / "types"

        with pytest.raises(WriteError, match="outside"):
            write_units([OutputUnit(path, "x\n")], out)

        assert not (tmp_path / "hero.ts").exists()
