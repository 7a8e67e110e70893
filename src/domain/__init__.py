"""Domain layer - authorization model.

Value objects (policy tuples, permissions, caller), enums, protocols
(ports) and domain events. The domain layer has NO dependencies on any
framework or infrastructure.

Structure:
- value_objects/: Immutable policy tuples and permissions
- enums/: Policy row and change types
- protocols/: Ports implemented by infrastructure
- events/: Policy change events
"""
