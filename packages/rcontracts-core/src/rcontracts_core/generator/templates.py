"""Jinja2 templates for generated Python artifacts.

Templates are rendered in a SandboxedEnvironment. Contract names and
field keys come from user-authored contract files, so every literal is
emitted through the ``pyrepr`` filter rather than interpolated raw.
"""

from __future__ import annotations

from typing import Any

from jinja2.sandbox import SandboxedEnvironment

CONSUMER_TEMPLATE = '''\
"""Consumer types for the {{ name }} contract.

Generated by rcontracts. Do not edit.
"""

from __future__ import annotations

{% if uses_datetime %}
from datetime import datetime
{% endif %}
from typing import {{ typing_imports | join(", ") }}
{% for decl in declarations %}


{% if decl.functional %}
{{ decl.name }} = TypedDict(
    {{ decl.name | pyrepr }},
    {
{% for field in decl.fields %}
        {{ field.key | pyrepr }}: {{ field.annotation }},{{ field.suffix }}
{% endfor %}
    },
)
{% else %}
class {{ decl.name }}(TypedDict):
{% for field in decl.fields %}
    {{ field.key }}: {{ field.annotation }}{{ field.suffix }}
{% else %}
    pass
{% endfor %}
{% endif %}
{% endfor %}


CONTRACT_NAME = {{ name | pyrepr }}
CONTRACT_INTENT = {{ intent | pyrepr }}
'''

PROVIDER_TEMPLATE = '''\
"""Provider resolver for the {{ name }} contract.

Replace each marked value with provider logic. Derived fields are computed
outside the origin and are intentionally absent.

Generated by rcontracts.
"""

from __future__ import annotations

from typing import Any

CONTRACT_NAME = {{ name | pyrepr }}


def {{ function_name }}(params: dict[str, Any]) -> dict[str, Any]:
    """Resolve data for the {{ name }} contract."""
{% for line in body %}
    {{ line }}
{% endfor %}
'''

_ENV = SandboxedEnvironment(
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)
_ENV.filters["pyrepr"] = repr


def render(template: str, **context: Any) -> str:
    """Render a template string with the shared sandboxed environment."""
    return _ENV.from_string(template).render(**context)
