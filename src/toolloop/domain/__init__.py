"""
domain - Value objects, result union, exceptions and ports.

No dependencies on agent/, infrastructure/ or adapters/.
"""

from toolloop.domain.exceptions import (
    AgentError,
    AgentNotReadyError,
    ConfigurationError,
    DuplicateToolError,
    GatewayError,
    ToolRegistrationError,
)
from toolloop.domain.models import (
    AgentConfig,
    AgentResponse,
    GenerationConfig,
    Message,
    ModelReply,
    Role,
    SessionSnapshot,
    ToolCallRecord,
    ToolCallRequest,
)
from toolloop.domain.results import Err, Ok, Result

__all__ = [
    "AgentConfig",
    "AgentError",
    "AgentNotReadyError",
    "AgentResponse",
    "ConfigurationError",
    "DuplicateToolError",
    "Err",
    "GatewayError",
    "GenerationConfig",
    "Message",
    "ModelReply",
    "Ok",
    "Result",
    "Role",
    "SessionSnapshot",
    "ToolCallRecord",
    "ToolCallRequest",
    "ToolRegistrationError",
]
