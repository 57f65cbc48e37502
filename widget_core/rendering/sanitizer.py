"""HTML 转义。

所有文本（用户输入与服务端返回）在进入任何格式化规则之前都必须先经过
escape()。这里只负责五个 HTML 元字符，不了解任何格式化语法。
"""

# 单次 translate，已替换出的实体不会被再次转义
# 不用 html.escape：它把 ' 转成 &#x27;，这里保持 &#039;
_ESCAPE_TABLE = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#039;",
    }
)

METACHARACTERS = frozenset("&<>\"'")


def escape(text: str) -> str:
    """把 & < > " ' 替换为对应实体，返回可安全嵌入标记的文本。"""

    return (text or "").translate(_ESCAPE_TABLE)
