from dataclasses import dataclass, field
from typing import Dict, Optional

from ..matrix import Matrix


@dataclass
class ReplContext:
    """Holds the state of the interactive session."""
    field_name: str = "float"
    show_steps: bool = True
    timing_enabled: bool = False
    debug_mode: bool = False
    matrices: Dict[str, Matrix] = field(default_factory=dict)
    last_result: Optional[Matrix] = None
