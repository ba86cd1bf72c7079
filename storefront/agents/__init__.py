"""
LLM agents used by the storefront backend.

Each agent is a single-shot Gemini workflow: build a prompt, make one call,
parse the output. Agents never touch HTTP request objects; the service layer
adapts route input to agent calls.
"""
