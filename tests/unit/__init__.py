"""Unit tests for individual components in isolation.

Coverage:
    - parsing/: Fence and table scanning, line classification, images
    - reveal/: Reveal state, transcript, controller and scroll policy
    - ui/: Session submit flow and block rendering
    - agent/: Client configuration and Gemini request handling

The language model is replaced by in-memory fakes or httpx.MockTransport.
"""
