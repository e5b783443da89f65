"""模板数据模型单元测试."""

import json

import pytest
from pydantic import ValidationError

from template_studio.models.geometry import Dimensions
from template_studio.models.layer import (
    ImageLayer,
    LayerType,
    LogoLayer,
    ShapeLayer,
    TextLayer,
    create_layer,
    update_layer,
)
from template_studio.models.template import Template
from template_studio.utils.exceptions import DuplicateIdError


def _text(layer_id: str, z_index: int) -> TextLayer:
    return TextLayer(id=layer_id, style={"zIndex": z_index})


class TestTemplateDefaults:
    """测试模板默认值."""

    def test_should_create_empty_instagram_post(self):
        """默认是 1080x1080 的空 Instagram Post."""
        template = Template(brand_id="b1")
        assert template.layer_count == 0
        assert template.dimensions == Dimensions(width=1080, height=1080)
        assert template.channel == "Instagram"
        assert template.kind == "Post"
        assert len(template.id) == 8

    def test_id_should_be_immutable(self):
        """模板ID创建后不可修改."""
        template = Template()
        with pytest.raises(ValidationError):
            template.id = "other"


class TestAddLayer:
    """测试添加图层."""

    def test_should_append_and_return_new_template(self, empty_template):
        """添加返回新模板，原模板不变."""
        layer = _text("a", 0)
        updated = empty_template.add_layer(layer)
        assert updated.layer_ids == ["a"]
        assert empty_template.layer_count == 0
        assert updated.id == empty_template.id

    def test_should_raise_on_duplicate_id(self, empty_template):
        """重复ID应抛出异常."""
        template = empty_template.add_layer(_text("a", 0))
        with pytest.raises(DuplicateIdError) as exc_info:
            template.add_layer(ShapeLayer(id="a"))
        assert exc_info.value.layer_id == "a"
        assert exc_info.value.code == "TEMPLATE_ERROR"


class TestRemoveLayer:
    """测试删除图层."""

    def test_should_remove_layer(self, empty_template):
        """删除指定图层."""
        template = empty_template.add_layer(_text("a", 0)).add_layer(_text("b", 1))
        assert template.remove_layer("a").layer_ids == ["b"]

    def test_should_be_idempotent(self, empty_template):
        """第二次删除返回同一个模板."""
        template = empty_template.add_layer(_text("a", 0))
        once = template.remove_layer("a")
        twice = once.remove_layer("a")
        assert twice is once
        assert twice.layer_count == 0

    def test_should_ignore_missing_id(self, empty_template):
        """删除不存在的图层不报错."""
        assert empty_template.remove_layer("missing") is empty_template


class TestReplaceLayer:
    """测试替换图层."""

    def test_should_keep_storage_order(self, empty_template):
        """替换不改变存储顺序."""
        template = empty_template.add_layer(_text("a", 0)).add_layer(_text("b", 1))
        layer = update_layer(template.get_layer("a"), {"style": {"zIndex": 9}})
        replaced = template.replace_layer(layer)
        assert replaced.layer_ids == ["a", "b"]
        assert replaced.get_layer("a").z_index == 9

    def test_should_ignore_missing_layer(self, empty_template):
        """图层不存在时返回原模板."""
        assert empty_template.replace_layer(_text("zz", 0)) is empty_template


class TestPaintOrder:
    """测试绘制顺序."""

    def test_should_sort_by_z_index(self, empty_template):
        """A(zIndex=2)、B(zIndex=1) 解析为 [B, A]."""
        template = empty_template.add_layer(_text("A", 2)).add_layer(_text("B", 1))
        assert [l.id for l in template.resolve_paint_order()] == ["B", "A"]

    def test_should_be_deterministic(self, empty_template):
        """同一模板多次解析结果相同."""
        template = (
            empty_template.add_layer(_text("a", 3))
            .add_layer(_text("b", 1))
            .add_layer(_text("c", 2))
        )
        assert template.resolve_paint_order() == template.resolve_paint_order()

    def test_should_break_ties_by_insertion_order(self, empty_template):
        """zIndex 相同时保持插入顺序，不受无关更新影响."""
        template = (
            empty_template.add_layer(_text("first", 1))
            .add_layer(_text("other", 0))
            .add_layer(_text("second", 1))
        )
        for i in range(5):
            other = update_layer(template.get_layer("other"), {"x": i * 10, "content": str(i)})
            template = template.replace_layer(other)
            order = [l.id for l in template.resolve_paint_order()]
            assert order == ["other", "first", "second"]

    def test_should_not_change_storage_order(self, empty_template):
        """调整绘制顺序不改变存储顺序."""
        template = empty_template.add_layer(_text("a", 0)).add_layer(_text("b", 1))
        template = template.replace_layer(update_layer(template.get_layer("a"), {"style": {"zIndex": 5}}))
        assert template.layer_ids == ["a", "b"]
        assert [l.id for l in template.resolve_paint_order()] == ["b", "a"]

    def test_scenario_text_then_image(self, empty_template):
        """文字、图片依次添加，再把文字移到顶层."""
        text = create_layer(LayerType.TEXT, empty_template.layer_count)
        template = empty_template.add_layer(text)
        assert (text.x, text.y, text.width, text.height, text.z_index) == (10, 10, 50, 10, 0)

        image = create_layer(LayerType.IMAGE, template.layer_count)
        template = template.add_layer(image)
        assert image.z_index == 1
        assert template.resolve_paint_order() == [text, image]

        raised = update_layer(text, {"style": {"zIndex": 5}})
        template = template.replace_layer(raised)
        assert [l.id for l in template.resolve_paint_order()] == [image.id, text.id]


class TestZIndexBounds:
    """测试层级范围."""

    def test_should_be_none_for_empty_template(self, empty_template):
        """空模板没有层级范围."""
        assert empty_template.max_z_index is None
        assert empty_template.min_z_index is None

    def test_should_report_range(self, empty_template):
        """返回最小和最大层级."""
        template = empty_template.add_layer(_text("a", -2)).add_layer(_text("b", 4))
        assert (template.min_z_index, template.max_z_index) == (-2, 4)


class TestClone:
    """测试克隆."""

    def test_should_assign_new_id(self, empty_template):
        """克隆得到新ID和新名称."""
        template = empty_template.add_layer(_text("a", 0))
        copy = template.clone()
        assert copy.id != template.id
        assert copy.name == "Standard Post Copy"
        assert copy.layer_ids == ["a"]

    def test_should_use_given_name(self, empty_template):
        """可以指定克隆名称."""
        assert empty_template.clone("Story Variant").name == "Story Variant"


class TestSerialization:
    """测试序列化."""

    @pytest.fixture
    def template(self, empty_template) -> Template:
        return (
            empty_template.add_layer(
                TextLayer(
                    id="t1",
                    content="Headline Here",
                    style={"zIndex": 1, "color": "#000", "fontSize": 40, "letterSpacing": 0.5},
                )
            )
            .add_layer(ShapeLayer(id="s1", style={"zIndex": 0, "backgroundColor": "#C9A878", "shadow": {"blur": 4}}))
            .add_layer(ImageLayer(id="i1", content="https://cdn.example.com/a.jpg", rotation=12.5))
            .add_layer(LogoLayer(id="l1", is_locked=True))
        )

    def test_should_round_trip_losslessly(self, template):
        """JSON 往返后所有字段保持不变."""
        restored = Template.from_json(template.to_json())
        assert restored == template
        assert restored.to_dict() == template.to_dict()

    def test_should_keep_unknown_style_keys(self, template):
        """未声明的样式键保存后不丢失."""
        restored = Template.from_json(template.to_json())
        assert restored.get_layer("t1").style.model_extra == {"letterSpacing": 0.5}
        assert restored.get_layer("s1").style.model_extra == {"shadow": {"blur": 4}}

    def test_should_use_camel_case_keys(self, template):
        """JSON 使用 camelCase 键."""
        data = json.loads(template.to_json())
        assert "brandId" in data
        assert data["layers"][0]["style"]["zIndex"] == 1
        assert data["layers"][3]["isLocked"] is True
        assert data["layers"][3]["source"] == {"slot": "primary"}

    def test_should_load_original_wire_shape(self):
        """可以加载不含可选字段的原始结构."""
        template = Template.from_dict(
            {
                "id": "t1",
                "name": "Standard Post",
                "brandId": "glvt",
                "channel": "Instagram",
                "kind": "Post",
                "dimensions": {"width": 1080, "height": 1080},
                "layers": [
                    {
                        "id": "l1",
                        "type": "text",
                        "content": "Headline Here",
                        "x": 10, "y": 10, "width": 80, "height": 20, "rotation": 0,
                        "style": {"fontSize": 40, "color": "#000", "zIndex": 1},
                    },
                    {"id": "l2", "type": "shape", "content": "", "x": 0, "y": 0,
                     "width": 100, "height": 20, "rotation": 0,
                     "style": {"backgroundColor": "#CCCCCC", "zIndex": 0}},
                ],
                "tags": ["basic"],
            }
        )
        assert template.brand_id == "glvt"
        assert isinstance(template.get_layer("l2"), ShapeLayer)
        assert [l.id for l in template.resolve_paint_order()] == ["l2", "l1"]

    def test_should_reject_duplicate_ids_on_load(self):
        """加载时发现重复图层ID应报错."""
        data = {
            "layers": [
                {"id": "x", "type": "text", "style": {"zIndex": 0}},
                {"id": "x", "type": "shape", "style": {"zIndex": 1}},
            ]
        }
        with pytest.raises(ValidationError, match="图层ID重复"):
            Template.from_dict(data)

    def test_should_reject_unknown_layer_type(self):
        """未知图层类型应报错."""
        with pytest.raises(ValidationError):
            Template.from_dict({"layers": [{"id": "v", "type": "video"}]})

    def test_should_keep_unknown_top_level_keys(self):
        """未声明的顶层键保存后不丢失."""
        template = Template.from_dict({"name": "Post", "customerField": {"a": 1}})
        restored = Template.from_json(template.to_json())
        assert restored.to_dict()["customerField"] == {"a": 1}
        assert restored.add_layer(_text("a", 0)).to_dict()["customerField"] == {"a": 1}

    def test_should_accept_long_name(self):
        """名称没有长度限制."""
        name = "N" * 101
        restored = Template.from_json(Template(name=name).to_json())
        assert restored.name == name

    def test_should_load_open_text_style_values(self):
        """文字样式中的非常规取值可以加载."""
        template = Template.from_dict(
            {
                "layers": [
                    {"id": "t", "type": "text",
                     "style": {"textAlign": "justify", "fontSize": 0, "fontWeight": 700}},
                ]
            }
        )
        style = template.get_layer("t").style
        assert (style.text_align, style.font_size, style.font_weight) == ("justify", 0, 700)
        assert Template.from_json(template.to_json()) == template
