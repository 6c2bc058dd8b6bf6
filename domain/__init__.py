"""Describes the kitchen brigade. Centres around the `Orchestrator`.

Why is this hard?

- Every step is a call to a large language model, served behind an api that
  can rate limit us, run out of credits, or just say something unusable.
- The director and reviewer are asked for JSON. They do not always oblige.
- The browser wants to know what is going on while it waits.

The gateway is hidden behind `CompletionClient` so it can be faked.
"""
