"""
adapters - Outer surfaces (CLI, REST) over the AgentFactory.
"""
