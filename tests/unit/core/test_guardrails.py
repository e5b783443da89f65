"""品牌规范校验单元测试."""

import pytest

from template_studio.core.guardrails import (
    ATTR_BACKGROUND_COLOR,
    ATTR_COLOR,
    ATTR_FONT_FAMILY,
    check_color,
    check_font,
    evaluate_layer,
    evaluate_template,
)
from template_studio.models.brand import BrandIdentity, BrandPalette, BrandTypography
from template_studio.models.layer import ImageLayer, LogoLayer, ShapeLayer, TextLayer


@pytest.fixture
def palette(brand_identity) -> BrandPalette:
    return brand_identity.palette


@pytest.fixture
def typography(brand_identity) -> BrandTypography:
    return brand_identity.typography


class TestCheckColor:
    """测试颜色检查."""

    @pytest.mark.parametrize("color", ["#C9A878", "#c9a878", "#FDFCF8", "#000000", "#ffffff"])
    def test_should_accept_palette_colors(self, palette, color):
        """品牌色与中性色合规，不区分大小写."""
        assert check_color(color, palette) is True

    @pytest.mark.parametrize("color", ["#FF0000", "#fffffe", "#C9A879", "#FFF"])
    def test_should_reject_other_colors(self, palette, color):
        """不做任何近似匹配."""
        assert check_color(color, palette) is False

    def test_should_ignore_unset_palette_colors(self):
        """未配置的品牌色不参与匹配."""
        palette = BrandPalette(primary="#123456")
        assert palette.colors == ["#123456", "#000000", "#FFFFFF"]
        assert check_color("", palette) is False


class TestCheckFont:
    """测试字体检查."""

    @pytest.mark.parametrize("font", ["Inter", "Inter Bold", "Playfair Display", "Playfair"])
    def test_should_accept_substring_match(self, typography, font):
        """双向子串匹配."""
        assert check_font(font, typography) is True

    def test_should_reject_unrelated_font(self, typography):
        """无关字体不合规."""
        assert check_font("Comic Sans", typography) is False

    def test_should_be_case_sensitive(self, typography):
        """字体匹配区分大小写."""
        assert check_font("inter", typography) is False

    def test_should_reject_empty_font(self, typography):
        """空字体名不匹配任何字体."""
        assert check_font("", typography) is False

    def test_should_skip_unconfigured_fonts(self):
        """未配置的品牌字体不会让任意字体通过."""
        assert check_font("Arial", BrandTypography(heading_font="Inter")) is False

    def test_blank_brand_font_should_not_match_everything(self):
        """空的品牌字体被跳过."""
        typography = BrandTypography(heading_font="", body_font="Inter")
        assert typography.fonts == ["Inter"]
        assert check_font("Comic Sans", typography) is False


class TestEvaluateLayer:
    """测试单图层校验."""

    def test_should_flag_off_palette_text_color(self, brand_identity):
        """品牌调色板外的文字颜色不合规，字体合规."""
        layer = TextLayer(style={"color": "#FF0000", "fontFamily": "Inter"})
        result = evaluate_layer(layer, brand_identity)
        assert result.color_ok is False
        assert result.font_ok is True
        assert result.passed is False
        assert result.violated_attributes == [ATTR_COLOR]
        assert result.violations[0].value == "#FF0000"

    def test_should_pass_brand_color(self, brand_identity):
        """强调色合规."""
        layer = TextLayer(style={"color": "#C9A878", "fontFamily": "Inter"})
        assert evaluate_layer(layer, brand_identity).passed is True

    def test_should_flag_off_brand_font(self, brand_identity):
        """非品牌字体不合规."""
        layer = TextLayer(style={"color": "#000000", "fontFamily": "Comic Sans"})
        result = evaluate_layer(layer, brand_identity)
        assert result.color_ok is True
        assert result.font_ok is False
        assert result.violated_attributes == [ATTR_FONT_FAMILY]

    def test_missing_attributes_should_be_compliant(self, brand_identity):
        """缺失的属性视为合规."""
        result = evaluate_layer(TextLayer(), brand_identity)
        assert result.passed is True
        assert result.violations == []

    def test_should_check_shape_background(self, brand_identity):
        """形状背景色参与颜色检查."""
        layer = ShapeLayer(style={"backgroundColor": "#CCCCCC"})
        result = evaluate_layer(layer, brand_identity)
        assert result.color_ok is False
        assert result.violated_attributes == [ATTR_BACKGROUND_COLOR]

    def test_should_ignore_background_on_text_style(self, brand_identity):
        """文字样式上的 backgroundColor 不参与检查."""
        layer = TextLayer(style={"backgroundColor": "#CCCCCC"})
        assert evaluate_layer(layer, brand_identity).passed is True

    @pytest.mark.parametrize("layer", [ImageLayer(content="a.png"), LogoLayer()])
    def test_image_layers_should_always_pass(self, brand_identity, layer):
        """图片与 Logo 图层没有可检查的属性."""
        assert evaluate_layer(layer, brand_identity).passed is True

    def test_should_pass_without_identity(self):
        """没有品牌识别时一律合规."""
        layer = TextLayer(style={"color": "#FF0000", "fontFamily": "Comic Sans"})
        assert evaluate_layer(layer, None).passed is True

    def test_should_serialize_camel_case(self, brand_identity):
        """校验结果使用 camelCase 键."""
        layer = TextLayer(style={"color": "#FF0000"})
        data = evaluate_layer(layer, brand_identity).model_dump(by_alias=True)
        assert data["colorOk"] is False
        assert data["fontOk"] is True


class TestEvaluateTemplate:
    """测试模板校验."""

    def test_should_evaluate_every_layer(self, empty_template, brand_identity):
        """每个图层都有校验结果."""
        template = (
            empty_template.add_layer(TextLayer(id="ok", style={"color": "#000000"}))
            .add_layer(TextLayer(id="bad", style={"color": "#123123"}))
            .add_layer(ImageLayer(id="img"))
        )
        results = evaluate_template(template, brand_identity)
        assert list(results) == ["ok", "bad", "img"]
        assert results["ok"].passed is True
        assert results["bad"].passed is False
        assert results["img"].passed is True

    def test_should_follow_identity_snapshot(self, empty_template):
        """同一图层在不同品牌快照下结果不同."""
        template = empty_template.add_layer(TextLayer(id="t", style={"color": "#112233"}))
        before = BrandIdentity(brand_id="glvt", primary_color="#445566")
        after = BrandIdentity(brand_id="glvt", primary_color="#112233")
        assert evaluate_template(template, before)["t"].passed is False
        assert evaluate_template(template, after)["t"].passed is True

