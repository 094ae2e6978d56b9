"""Mock-editor cleanup.

Heuristic rule table plus a batched delete engine. Used by the
``/api/cleanup-mock`` route and the ``cleanup_mock_editors`` script.
"""
