"""
Services layer for AI Legal Buddy business logic.

MODULES:
- ai/: multi-provider AI gateway (registry, failover, output repair)

STANDALONE SERVICES:
- assistant: caller-facing chat/summary service (timeouts, localized fallbacks)

ARCHITECTURE:
1. Startup: ai.create_ai_gateway(settings) → one ProviderRegistry per process
2. Live call: assistant.LegalAssistant.chat → AIGateway.generate_reply
3. In-call analysis: assistant.LegalAssistant.analyze → AIGateway.analyze_situation
4. End of session: assistant.LegalAssistant.summarize_session → AIGateway.generate_structured_summary
"""
