from .base import Tool, ToolContext, ToolResponse
from .compatibility import CompatibilityTool
from .fallback import FallbackTool
from .handoff import HandoffTool
from .installation import InstallationTool
from .router import ToolRouter
from .transactions import TransactionTool
from .troubleshooting import TroubleshootingTool

__all__ = [
    "Tool",
    "ToolContext",
    "ToolResponse",
    "ToolRouter",
    "CompatibilityTool",
    "FallbackTool",
    "HandoffTool",
    "InstallationTool",
    "TransactionTool",
    "TroubleshootingTool",
]
