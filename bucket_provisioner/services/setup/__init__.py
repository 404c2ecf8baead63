"""Setup (provisioning) services.

Orchestration helpers that *provision* or *verify* the external infrastructure
behind a resource binding (currently: one Cloud Storage bucket per binding).
"""
