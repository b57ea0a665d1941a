# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""JSON 字段裁剪

?fields=id,name,expand.user.email 只返回指定字段；`*` 表示当前层级全部字段。
"""

from __future__ import annotations

from typing import Any, Dict, Optional

FIELDS_PARAM = "fields"

FieldTree = Dict[str, "FieldTree"]


def parse_fields(raw: Optional[str]) -> FieldTree:
    tree: FieldTree = {}
    for item in (raw or "").split(","):
        item = item.strip()
        if not item:
            continue

        node = tree
        for part in item.split("."):
            part = part.strip()
            if not part:
                break
            node = node.setdefault(part, {})
    return tree


def pick_fields(data: Any, tree: FieldTree) -> Any:
    if not tree:
        return data

    if isinstance(data, list):
        return [pick_fields(item, tree) for item in data]

    if not isinstance(data, dict):
        return data

    if "*" in tree:
        wildcard = tree["*"]
        picked = {k: pick_fields(v, tree.get(k) or wildcard) for k, v in data.items()}
        return picked

    return {k: pick_fields(data[k], sub) for k, sub in tree.items() if k in data}


def serialize(data: Any, raw_fields: Optional[str]) -> Any:
    return pick_fields(data, parse_fields(raw_fields))
