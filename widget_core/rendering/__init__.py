"""消息渲染：先转义，再执行 markdown-lite 规则。"""

from widget_core.rendering.markdown_lite import render
from widget_core.rendering.sanitizer import escape


def render_message(raw_text: str) -> str:
    """原始文本 -> 安全标记。格式化规则永远只作用于转义后的文本。"""

    return render(escape(raw_text))


__all__ = ["escape", "render", "render_message"]
