"""Domain models and the integration error taxonomy.

- models: ChatMessage / ChatResult and the search envelope.
- exceptions: IntegrationError and its subclasses.
"""
