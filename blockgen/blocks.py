"""Block graph consumed by the generator.

The generator only needs four things from a block: its type, its field
values, the block plugged into a named input, and the next block in its
statement sequence. `load_workspace` reads the Blockly JSON serialization
into this shape.

Example document:

    {
      "blocks": {"blocks": [
        {"type": "variables_set", "id": "a1", "x": 10, "y": 10,
         "fields": {"VAR": {"id": "v1"}},
         "inputs": {"VALUE": {"block": {"type": "math_number", "fields": {"NUM": 3}}}},
         "next": {"block": {...}}}
      ]},
      "variables": [{"name": "x", "id": "v1"}]
    }

The graph must be acyclic; nothing here checks that.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import WorkspaceError


@dataclass
class Block:
    """One node of the visual program."""

    type: str
    id: str = ""
    fields: dict[str, str] = field(default_factory=dict)
    inputs: dict[str, Block] = field(default_factory=dict)
    next: Block | None = None
    x: float = 0
    y: float = 0
    disabled: bool = False
    comment: str | None = None
    extra_state: dict[str, object] = field(default_factory=dict)
    suppress_prefix_suffix: bool = False
    input_names: list[str] = field(default_factory=list)

    def field_value(self, name: str) -> str | None:
        return self.fields.get(name)

    def has_field(self, name: str) -> bool:
        return name in self.fields

    def input_block(self, name: str) -> Block | None:
        """Block plugged into a value input, or None."""
        return self.inputs.get(name)

    def statement_block(self, name: str) -> Block | None:
        """First block of a statement input, or None."""
        return self.inputs.get(name)

    def has_input(self, name: str) -> bool:
        """Check if the block declares the input, connected or not."""
        return name in self.inputs or name in self.input_names

    def state_int(self, key: str, default: int = 0) -> int:
        value = self.extra_state.get(key, default)
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            return default
        try:
            return int(value)
        except ValueError:
            return default

    def state_bool(self, key: str) -> bool:
        value = self.extra_state.get(key, False)
        if isinstance(value, str):
            return value.lower() == "true"
        return bool(value)

    def state_names(self, key: str) -> list[str]:
        """A list of names from extra state, e.g. procedure parameters."""
        raw = self.extra_state.get(key, [])
        names: list[str] = []
        if not isinstance(raw, list):
            return names
        for item in raw:
            if isinstance(item, dict):
                names.append(str(item.get("name", "")))
            else:
                names.append(str(item))
        return names


@dataclass
class Workspace:
    """Top-level blocks plus the workspace-wide options."""

    top_blocks: list[Block] = field(default_factory=list)
    variables: list[str] = field(default_factory=list)
    one_based_index: bool = True

    def ordered_top_blocks(self) -> list[Block]:
        """Top blocks sorted top-to-bottom, then left-to-right."""
        return sorted(self.top_blocks, key=lambda b: (b.y, b.x))


# --- JSON loading ---


def _field_text(value: object, var_names: dict[str, str], path: str) -> str:
    if isinstance(value, dict):
        if "id" in value:
            var_id = str(value["id"])
            if var_id not in var_names:
                raise WorkspaceError("unknown variable id " + repr(var_id), path)
            return var_names[var_id]
        if "name" in value:
            return str(value["name"])
        raise WorkspaceError("unsupported field value", path)
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (int, float, str)):
        return str(value)
    raise WorkspaceError("unsupported field value", path)


def _load_block(data: object, var_names: dict[str, str], path: str, counter: list[int]) -> Block:
    if not isinstance(data, dict):
        raise WorkspaceError("block must be an object", path)
    block_type = data.get("type")
    if not isinstance(block_type, str) or block_type == "":
        raise WorkspaceError("block has no type", path)
    block_id = data.get("id")
    if block_id is None:
        counter[0] += 1
        block_id = "b" + str(counter[0])
    block = Block(type=block_type, id=str(block_id))
    raw_fields = data.get("fields", {})
    if not isinstance(raw_fields, dict):
        raise WorkspaceError("fields must be an object", path)
    for name, value in raw_fields.items():
        block.fields[name] = _field_text(value, var_names, path + ".fields." + name)
    raw_inputs = data.get("inputs", {})
    if not isinstance(raw_inputs, dict):
        raise WorkspaceError("inputs must be an object", path)
    for name, conn in raw_inputs.items():
        block.input_names.append(name)
        if not isinstance(conn, dict):
            raise WorkspaceError("input must be an object", path + ".inputs." + name)
        child = conn.get("block")
        if child is None:
            continue
        block.inputs[name] = _load_block(child, var_names, path + ".inputs." + name, counter)
    nxt = data.get("next")
    if isinstance(nxt, dict) and nxt.get("block") is not None:
        block.next = _load_block(nxt["block"], var_names, path + ".next", counter)
    try:
        block.x = float(data.get("x", 0))
        block.y = float(data.get("y", 0))
    except (TypeError, ValueError):
        raise WorkspaceError("block position must be numeric", path) from None
    block.disabled = bool(data.get("disabled", False)) or data.get("enabled") is False
    icons = data.get("icons")
    if isinstance(icons, dict) and isinstance(icons.get("comment"), dict):
        block.comment = icons["comment"].get("text")
    elif isinstance(data.get("comment"), str):
        block.comment = data["comment"]
    extra = data.get("extraState", {})
    if isinstance(extra, dict):
        block.extra_state = dict(extra)
    block.suppress_prefix_suffix = bool(data.get("suppressPrefixSuffix", False))
    return block


def load_workspace(data: object) -> Workspace:
    """Build a Workspace from a decoded Blockly JSON document."""
    if not isinstance(data, dict):
        raise WorkspaceError("workspace must be an object")
    var_names: dict[str, str] = {}
    variables: list[str] = []
    raw_vars = data.get("variables", [])
    if not isinstance(raw_vars, list):
        raise WorkspaceError("variables must be a list")
    for i, var in enumerate(raw_vars):
        if not isinstance(var, dict) or "name" not in var:
            raise WorkspaceError("variable needs a name", "variables[" + str(i) + "]")
        name = str(var["name"])
        var_names[str(var.get("id", name))] = name
        variables.append(name)
    blocks_section = data.get("blocks", {})
    if not isinstance(blocks_section, dict):
        raise WorkspaceError("blocks must be an object")
    raw_blocks = blocks_section.get("blocks", [])
    if not isinstance(raw_blocks, list):
        raise WorkspaceError("blocks.blocks must be a list")
    counter = [0]
    top: list[Block] = []
    for i, raw in enumerate(raw_blocks):
        top.append(_load_block(raw, var_names, "blocks[" + str(i) + "]", counter))
    one_based = data.get("oneBasedIndex", True)
    return Workspace(top_blocks=top, variables=variables, one_based_index=bool(one_based))
