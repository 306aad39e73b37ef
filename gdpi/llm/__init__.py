"""
LLM reply validation
"""
