"""
Integration Tests Package

End-to-end flows through JumpScareBackend and the HTTP surface.

TEST AXIOMS:
=============
1. Collaborators are injected, never looked up globally
2. Row failures are counted, never raised
3. Segments are derived from stored records on every query
"""
