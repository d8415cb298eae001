"""
analysis_engine — skin image analysis via an external multimodal model.

Components:
  prompts          — fixed system prompt, user instruction and model defaults
  gateway_client   — single chat-completion call to the AI gateway
  response_parser  — fence stripping, strict JSON parse, fallback structure
"""
