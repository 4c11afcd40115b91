from setup_order.ingest.adapter_contract import (
    Comment,
    ExpressionKind,
    ExpressionShape,
    LanguageAdapter,
    SetupBlock,
    Statement,
    StatementKind,
)


def adapter_for_path(path):
    from setup_order.ingest.registry import adapter_for_path as _adapter_for_path

    return _adapter_for_path(path)


__all__ = [
    "Comment",
    "ExpressionKind",
    "ExpressionShape",
    "LanguageAdapter",
    "SetupBlock",
    "Statement",
    "StatementKind",
    "adapter_for_path",
]
