"""
Context Layer - Host Snapshot Helpers

Module detection, context summaries and the permission policy consulted
before any action runs.
"""

from memora_assistant.context.provider import (
    AllowAllPolicy,
    ModuleInfo,
    PermissionPolicy,
    RolePermissionPolicy,
    build_context_summary,
    detect_current_module,
)

__all__ = [
    "AllowAllPolicy",
    "ModuleInfo",
    "PermissionPolicy",
    "RolePermissionPolicy",
    "build_context_summary",
    "detect_current_module",
]
