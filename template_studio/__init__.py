"""品牌模板设计引擎.

基于图层的模板编辑引擎，以及检查图层样式是否符合品牌调色板与字体的
品牌规范校验。
"""

from template_studio.utils.constants import APP_VERSION

__version__ = APP_VERSION
