"""模板尺寸预设单元测试."""

import pytest

from template_studio.services.template_presets import (
    BLANK_PRESET,
    FILTER_ALL,
    PRESET_CATALOG,
    RATIO_LANDSCAPE,
    RATIO_PORTRAIT,
    RATIO_SQUARE,
    create_from_preset,
    find_presets,
    get_preset,
)


class TestCatalog:
    """测试预设目录."""

    def test_blank_preset_should_come_first(self):
        """空白画布在目录首位."""
        assert PRESET_CATALOG[0] is BLANK_PRESET
        assert (BLANK_PRESET.width, BLANK_PRESET.height) == (1080, 1080)

    def test_ids_should_be_unique(self):
        """预设ID唯一."""
        ids = [preset.id for preset in PRESET_CATALOG]
        assert len(ids) == len(set(ids))

    @pytest.mark.parametrize(
        "preset_id, ratio",
        [("ig-post", RATIO_SQUARE), ("ig-story", RATIO_PORTRAIT), ("yt-thumbnail", RATIO_LANDSCAPE)],
    )
    def test_ratio(self, preset_id, ratio):
        """按宽高判断比例分类."""
        assert get_preset(preset_id).ratio == ratio

    def test_get_missing_preset(self):
        """不存在的预设返回 None."""
        assert get_preset("missing") is None


class TestFindPresets:
    """测试预设筛选."""

    def test_should_return_all_without_filters(self):
        """没有条件时返回全部."""
        assert find_presets() == list(PRESET_CATALOG)
        assert find_presets(channel=FILTER_ALL, kind=FILTER_ALL, ratio=FILTER_ALL) == list(PRESET_CATALOG)

    def test_should_filter_by_channel_and_kind(self):
        """按渠道和类型筛选."""
        presets = find_presets(channel="YouTube", kind="Banner")
        assert [p.id for p in presets] == ["yt-banner"]

    def test_should_filter_by_ratio(self):
        """按比例筛选."""
        presets = find_presets(ratio=RATIO_PORTRAIT)
        assert {p.id for p in presets} == {"ig-story", "ig-cover", "tt-background", "pr-flyer"}

    def test_should_search_name_case_insensitively(self):
        """名称搜索不区分大小写."""
        assert [p.id for p in find_presets(search="THUMBNAIL")] == ["yt-thumbnail"]

    def test_no_match(self):
        """没有匹配时返回空列表."""
        assert find_presets(channel="Pinterest") == []


class TestCreateFromPreset:
    """测试从预设创建模板."""

    def test_should_create_empty_template(self):
        """创建空白模板."""
        template = create_from_preset(get_preset("fb-post"), "glvt")
        assert template.layer_count == 0
        assert template.brand_id == "glvt"
        assert template.name == "Standard Link Post"
        assert (template.channel, template.kind) == ("Facebook", "Post")
        assert (template.dimensions.width, template.dimensions.height) == (1200, 630)

    def test_should_use_given_name(self):
        """可以指定模板名称."""
        assert create_from_preset(BLANK_PRESET, "glvt", name="Launch").name == "Launch"

    def test_should_assign_new_ids(self):
        """每次创建都有新ID."""
        assert create_from_preset(BLANK_PRESET, "glvt").id != create_from_preset(BLANK_PRESET, "glvt").id
