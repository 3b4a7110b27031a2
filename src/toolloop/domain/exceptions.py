"""
domain.exceptions - Custom exception hierarchy for the agent core.

All errors inherit from AgentError so callers can catch broad or
specific exceptions as needed. Tool failures are NOT exceptions: they
travel as Err results and are fed back to the model.
"""


class AgentError(Exception):
    """Base exception for all agent-level errors."""


class AgentNotReadyError(AgentError):
    """Raised when the loop is used before its collaborators are bound."""


class GatewayError(AgentError):
    """Raised inside the loop when the model gateway reports a failure."""


class ToolRegistrationError(AgentError):
    """Raised when a tool cannot be added to the registry."""


class DuplicateToolError(ToolRegistrationError):
    """Raised when registering a name that already exists without replace=True."""


class ConfigurationError(AgentError):
    """Raised when settings are missing or malformed."""
