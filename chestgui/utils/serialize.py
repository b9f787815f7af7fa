import json


def _is_scalar(node) -> bool:
    return node is None or isinstance(node, (str, bool, int, float))


def _is_flat(node) -> bool:
    """Scalars, empty containers and arrays of scalars render on one line."""
    if _is_scalar(node):
        return True
    if isinstance(node, (list, tuple, dict)) and not node:
        return True
    if isinstance(node, (list, tuple)):
        return all(_is_scalar(item) for item in node)
    return False


def _is_inline_object(node) -> bool:
    return isinstance(node, dict) and all(_is_flat(v) for v in node.values())


def _inline(node) -> str:
    if _is_scalar(node):
        return json.dumps(node, ensure_ascii=False)
    if isinstance(node, dict):
        if not node:
            return "{}"
        members = ", ".join(
            f"{json.dumps(str(k), ensure_ascii=False)}: {_inline(v)}"
            for k, v in node.items()
        )
        return "{" + members + "}"
    return "[" + ", ".join(_inline(item) for item in node) + "]"


def _render(node, indent: int, level: int, in_array: bool) -> str:
    if _is_flat(node) or (in_array and _is_inline_object(node)):
        return _inline(node)

    pad = " " * (indent * (level + 1))
    closing_pad = " " * (indent * level)
    if isinstance(node, dict):
        members = [
            f"{pad}{json.dumps(str(k), ensure_ascii=False)}: "
            f"{_render(v, indent, level + 1, False)}"
            for k, v in node.items()
        ]
        return "{\n" + ",\n".join(members) + "\n" + closing_pad + "}"
    items = [f"{pad}{_render(item, indent, level + 1, True)}" for item in node]
    return "[\n" + ",\n".join(items) + "\n" + closing_pad + "]"


def dumps(node, indent: int = 3) -> str:
    """
    Serialize a dict/list/scalar tree to JSON in the layout JSON UI files
    conventionally use.

    Objects expand one member per line, while arrays of scalars stay on one
    line, as do objects inside arrays whose members are all flat (variable
    override lists). The output is always valid JSON.

    Args:
        node: The tree to serialize.
        indent (int): Spaces per nesting level.

    Returns:
        str: The JSON text, non-ASCII characters left unescaped.
    """
    return _render(node, indent, 0, False)
