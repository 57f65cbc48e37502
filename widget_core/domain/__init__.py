"""领域层模型与协议。

包含：
- models: Sender / WidgetPhase / RequestState / WidgetIntent 等枚举与值对象。
- conversation: Message 与只追加的 ConversationLog。
- exceptions: ChatClient 失败对应的业务异常类型。
"""
