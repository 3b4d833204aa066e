"""Print the table settings as reStructuredText option descriptions."""

from __future__ import annotations

import json

from tabgrid.config import SETTINGS

s = ""

for name, setting in SETTINGS.items():
    schema = setting.schema
    s += f".. option:: {name}\n\n"
    if (default := schema.get("default")) is not None:
        s += f":default: ``{json.dumps(default)}``\n"
    if (type_ := schema.get("type")) is not None:
        s += f":type: :keyword:`{type_}`\n"
    if (choices := schema.get("enum")) is not None:
        s += f":options: [``{'``, ``'.join(choices)}``]\n"
    s += f":description: {setting.help}\n\n"

print(s, end="")
