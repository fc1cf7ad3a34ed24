"""AI request gateway.

Turns user prompts, plain or augmented with budgeting data, into text from
one of two LLM providers with:
  - Provider Router (credential shape → Gemini or OpenAI, model resolution)
  - Throttle Gate (single-flight + minimum interval)
  - Retry Engine (exponential backoff on rate limits, bounded attempts)
  - Timeout Race (hard deadline per provider call)
  - Error Classifier (failure → user-facing message)
  - Prompt Builder (budgeting snapshot → summary text)
"""
