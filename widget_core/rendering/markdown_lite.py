"""Markdown-lite 渲染器。

输入必须是已经 escape() 过的安全文本。渲染由一组固定顺序的纯函数规则组成，
每条规则都是 (text) -> text 的正则替换，可以单独调用测试：

1. 粗体：**x** / __x__ -> <strong>
2. 斜体：*x* / _x_ -> <em>（必须在粗体之后，避免吃掉半个粗体分隔符）
3. 行内代码：`x` -> <code>
4. 换行：\\n -> <br>\\n（保留原换行，后续按行匹配的规则仍能识别源行）
5. 代码块：```x``` -> <pre><code>
6. 列表行：N. text / • - * text -> 缩进 div

代码块在所有规则之前先被切分出来，其内容只做过转义、不参与其他规则，
其余规则只作用于围栏之间的正文。后面的规则不会再匹配前面规则输出的标签。
"""

import re
from dataclasses import dataclass
from typing import Iterable, List, Tuple


@dataclass(frozen=True)
class Rule:
    """一条格式化规则。"""

    name: str
    pattern: "re.Pattern[str]"
    replacement: str

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


_CODE_STYLE = "background: #f0f0f0; padding: 2px 4px; border-radius: 3px; font-family: monospace;"
_PRE_STYLE = "background: #f5f5f5; padding: 8px; border-radius: 4px; overflow-x: auto; margin: 8px 0;"
_INDENT_STYLE = "margin-left: 16px;"

# 行内规则不跨行，否则按行匹配的列表规则会切开已输出的标签
BOLD_ASTERISK = Rule("bold_asterisk", re.compile(r"\*\*([^*\n]+)\*\*"), r"<strong>\1</strong>")
BOLD_UNDERSCORE = Rule("bold_underscore", re.compile(r"__([^_\n]+)__"), r"<strong>\1</strong>")
# 开头不能是空白，否则 "* item" 这样的列表标记会被当成斜体起始
ITALIC_ASTERISK = Rule("italic_asterisk", re.compile(r"\*(?!\s)([^*\n]+)\*"), r"<em>\1</em>")
ITALIC_UNDERSCORE = Rule("italic_underscore", re.compile(r"_(?!\s)([^_\n]+)_"), r"<em>\1</em>")
INLINE_CODE = Rule("inline_code", re.compile(r"`([^`\n]+)`"), rf'<code style="{_CODE_STYLE}">\1</code>')
LINE_BREAKS = Rule("line_breaks", re.compile(r"\r?\n"), "<br>\n")
CODE_BLOCK = Rule("code_block", re.compile(r"```([^`]+)```"), rf'<pre style="{_PRE_STYLE}"><code>\1</code></pre>')
NUMBERED_LIST = Rule(
    "numbered_list",
    re.compile(r"^(\d+)\.[ \t]+(.+?)(?:<br>)?$", re.MULTILINE),
    rf'<div style="{_INDENT_STYLE}">\1. \2</div>',
)
BULLET_LIST = Rule(
    "bullet_list",
    re.compile(r"^[•\-*][ \t]+(.+?)(?:<br>)?$", re.MULTILINE),
    rf'<div style="{_INDENT_STYLE}">• \1</div>',
)

# 完整规则顺序（顺序本身是契约）
RULES: Tuple[Rule, ...] = (
    BOLD_ASTERISK,
    BOLD_UNDERSCORE,
    ITALIC_ASTERISK,
    ITALIC_UNDERSCORE,
    INLINE_CODE,
    LINE_BREAKS,
    CODE_BLOCK,
    NUMBERED_LIST,
    BULLET_LIST,
)

# 作用于围栏之外正文的规则，保持 RULES 中的相对顺序
PROSE_RULES: Tuple[Rule, ...] = tuple(rule for rule in RULES if rule is not CODE_BLOCK)


def get_rule(name: str) -> Rule:
    for rule in RULES:
        if rule.name == name:
            return rule
    raise KeyError(f"Unknown rule: {name!r}")


def apply_rules(text: str, rules: Iterable[Rule]) -> str:
    for rule in rules:
        text = rule.apply(text)
    return text


def split_fences(safe_text: str) -> List[Tuple[bool, str]]:
    """把文本切成 (is_fence, segment) 片段，围栏片段包含 ``` 本身。"""

    segments: List[Tuple[bool, str]] = []
    pos = 0
    for match in CODE_BLOCK.pattern.finditer(safe_text):
        if match.start() > pos:
            segments.append((False, safe_text[pos:match.start()]))
        segments.append((True, match.group(0)))
        pos = match.end()
    if pos < len(safe_text):
        segments.append((False, safe_text[pos:]))
    return segments


def render(safe_text: str) -> str:
    """对已转义文本执行完整的 markdown-lite 管线。"""

    parts: List[str] = []
    for is_fence, segment in split_fences(safe_text):
        if is_fence:
            parts.append(CODE_BLOCK.apply(segment))
        else:
            parts.append(apply_rules(segment, PROSE_RULES))
    return "".join(parts)
