"""
Source Code Root Module

Registers virtual entities with a Home Assistant hub through its REST API,
relaying discovery envelopes over a set of `input_text` helper entities.

Layer Structure:
- Domain: Entities, encoding rules and gateway contracts
- Application: Publish/confirm/registry/state use cases and DTOs
- Infrastructure: httpx implementations of the gateway contracts
- Shared: Cross-cutting concerns (logging, environment, constants)
- Main: Composition root and configuration
"""
