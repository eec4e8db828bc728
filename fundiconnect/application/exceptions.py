class LLMUpstreamError(RuntimeError):
    """Raised when the intent-extraction model cannot be reached (timeouts, network errors, 5xx)."""
    pass


class LLMContractError(RuntimeError):
    """Raised when the model answers with something other than the agreed JSON shape."""
    pass


class ProviderRosterError(RuntimeError):
    """Raised when a provider roster source cannot be read at all."""
    pass
