"""Workflow type names."""

AGENT_CREATION = "agent-creation"
LEFTCURVE_AGENT_CREATION = "leftcurve-agent-creation"
