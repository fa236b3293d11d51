import dataclasses
from typing import Any, Dict, Tuple

MAX_INPUTS = 3


@dataclasses.dataclass(frozen=True)
class Recipe:
    """A single crafting recipe: up to three inputs producing one output.

    Input names are stripped and blank ones dropped on construction. The
    order of inputs is kept for display only.
    """

    inputs: Tuple[str, ...]
    output: str
    qty: int = 1

    def __post_init__(self):
        inputs = tuple(name.strip() for name in self.inputs if name and name.strip())
        output = (self.output or "").strip()
        if not inputs:
            raise ValueError("recipe needs at least one input")
        if len(inputs) > MAX_INPUTS:
            raise ValueError(
                f"recipe takes at most {MAX_INPUTS} inputs, got {len(inputs)}"
            )
        if not output:
            raise ValueError("recipe needs an output name")
        if self.qty < 1:
            raise ValueError(f"recipe quantity must be positive, got {self.qty}")
        object.__setattr__(self, "inputs", inputs)
        object.__setattr__(self, "output", output)

    def to_dict(self) -> Dict[str, Any]:
        return {"inputs": list(self.inputs), "output": self.output, "qty": self.qty}
