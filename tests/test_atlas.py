"""
Tests for TextureAtlas / AtlasRegion and the atlas definition file
"""
import json

import pytest

from atlaspacker import AtlasPacker, AtlasRegion, PackConfig, TextureAtlas
from atlaspacker.exceptions import AtlasFileError


class TestAtlasRegion:

    def test_calculate_uv(self):
        region = AtlasRegion("sprite", 64, 32, 32, 16)
        region.calculate_uv(256, 128)

        assert region.u1 == pytest.approx(64 / 256)
        assert region.v1 == pytest.approx(32 / 128)
        assert region.u2 == pytest.approx(96 / 256)
        assert region.v2 == pytest.approx(48 / 128)

    def test_calculate_uv_rejects_empty_texture(self):
        region = AtlasRegion("sprite", 0, 0, 8, 8)
        with pytest.raises(ValueError):
            region.calculate_uv(0, 128)

    def test_rect(self):
        region = AtlasRegion("rect_test", 100, 200, 50, 75)
        assert region.rect == (100, 200, 50, 75)
        assert region.rotated is False


class TestTextureAtlas:

    def test_add_region_rect_sets_uvs(self):
        atlas = TextureAtlas("ui")
        atlas.set_size(256, 128)
        region = atlas.add_region_rect("button", 64, 32, 32, 16)

        assert atlas.get_region("button") is region
        assert region.uv == pytest.approx([0.25, 0.25, 0.375, 0.375])

    def test_add_region_rect_without_size(self):
        atlas = TextureAtlas("ui")
        region = atlas.add_region_rect("button", 64, 32, 32, 16)
        assert region.uv == [0.0, 0.0, 0.0, 0.0]

        atlas.set_size(128, 64)
        atlas.recalculate_uvs()
        assert region.uv == pytest.approx([0.5, 0.5, 0.75, 0.75])

    def test_region_management(self):
        atlas = TextureAtlas("ui", 64, 64)
        atlas.add_region_rect("a", 0, 0, 8, 8)
        atlas.add_region_rect("b", 8, 0, 8, 8)

        assert atlas.region_count == 2
        assert atlas.region_names == ["a", "b"]
        assert "a" in atlas
        assert atlas.remove_region("a") is True
        assert atlas.remove_region("a") is False
        assert atlas.has_region("a") is False
        assert atlas.get_region("a") is None

        atlas.clear_regions()
        assert len(atlas) == 0

    def test_add_region_replaces_same_name(self):
        atlas = TextureAtlas("ui", 64, 64)
        atlas.add_region_rect("a", 0, 0, 8, 8)
        atlas.add_region_rect("a", 16, 16, 4, 4)
        assert atlas.region_count == 1
        assert atlas.get_region("a").rect == (16, 16, 4, 4)


class TestAtlasFile:

    def test_save_and_load_packed_atlas(self, tmp_path):
        packer = AtlasPacker(PackConfig(max_width=256, max_height=256))
        packer.add_image("hero", 40, 60)
        packer.add_image("coin", 16, 16)
        packer.pack()
        atlas = packer.create_atlas("sprites", texture_path="sprites.png")

        path = tmp_path / "sprites.json"
        atlas.save(path)

        data = json.loads(path.read_text())
        assert data["name"] == "sprites"
        assert data["texture_path"] == "sprites.png"
        assert [r["name"] for r in data["regions"]] == ["hero", "coin"]

        loaded = TextureAtlas.load(path)
        assert (loaded.width, loaded.height) == (atlas.width, atlas.height)
        assert loaded.region_names == atlas.region_names
        for region in atlas:
            other = loaded.get_region(region.name)
            assert other.rect == region.rect
            assert other.uv == pytest.approx(region.uv)

    def test_texture_path_omitted_when_unset(self, tmp_path):
        path = tmp_path / "empty.json"
        TextureAtlas("empty").save(path)
        data = json.loads(path.read_text())
        assert "texture_path" not in data
        assert data["regions"] == []

    def test_load_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(AtlasFileError, match="Invalid JSON"):
            TextureAtlas.load(path)

    def test_load_duplicate_region_names(self, tmp_path):
        path = tmp_path / "dupes.json"
        region = {"name": "a", "x": 0, "y": 0, "width": 4, "height": 4}
        path.write_text(json.dumps({"name": "dupes", "width": 8, "height": 8, "regions": [region, region]}))
        with pytest.raises(AtlasFileError, match="Invalid atlas definition"):
            TextureAtlas.load(path)

    def test_load_rejects_unknown_fields(self, tmp_path):
        path = tmp_path / "extra.json"
        path.write_text(json.dumps({"name": "x", "width": 8, "height": 8, "regions": [], "format": "rgba"}))
        with pytest.raises(AtlasFileError):
            TextureAtlas.load(path)

    def test_load_keeps_rotated_flag(self, tmp_path):
        path = tmp_path / "rotated.json"
        region = {"name": "a", "x": 0, "y": 0, "width": 4, "height": 8, "rotated": True}
        path.write_text(json.dumps({"name": "r", "width": 8, "height": 8, "regions": [region]}))
        atlas = TextureAtlas.load(path)
        assert atlas.get_region("a").rotated is True
        assert atlas.get_region("a").uv == pytest.approx([0.0, 0.0, 0.5, 1.0])
