"""ChatClient 抽象接口。

WidgetSession 不直接依赖 HTTP 细节，而是依赖此协议：

- ask(text): 执行一次请求/响应交换，成功返回回答文本，
  失败抛出 domain.exceptions 中的 BusinessError 子类。

测试中可以用任意实现了 ask 协程的对象替换真实客户端。
"""

from typing import Protocol


class ChatClient(Protocol):
    """问答服务客户端协议。"""

    name: str

    async def ask(self, text: str) -> str:
        ...
