"""Code generators for scaffolding."""

import json
from pathlib import Path
from typing import Tuple


def generate_component(
    name: str, components_dir: Path = Path("components")
) -> Tuple[Path, Path]:
    """Generate a component template and its data sidecar.

    Returns the paths of the template and sidecar files.
    """
    components_dir.mkdir(parents=True, exist_ok=True)

    template_file = components_dir / f"{name}.html"
    sidecar_file = components_dir / f"{name}.json"

    if template_file.exists():
        raise ValueError(f"Component {name} already exists")

    template = f"""<div class="{name}">
  <h2>{{{{ Title }}}}</h2>
  <ul>
    <li v-for="Item in Items">{{{{ Item }}}}</li>
  </ul>
</div>
"""
    sidecar = {
        "data": {"Items": [f"First {name} item", f"Second {name} item"]},
        "props": ["Title"],
    }

    template_file.write_text(template)
    sidecar_file.write_text(json.dumps(sidecar, indent=2) + "\n")
    return template_file, sidecar_file
