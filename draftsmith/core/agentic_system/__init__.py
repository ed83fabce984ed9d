"""
LLM invocation, structured output decoding and the generation agent.
"""
