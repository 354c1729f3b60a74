"""
Service Layer - Conversation Orchestration

MessageProcessor (one pure turn), ChatService (host-side sessions),
DomainOperations (external collaborators) and the service exceptions.
Import from the submodules directly.
"""
