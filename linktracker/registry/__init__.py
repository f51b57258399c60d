from linktracker.registry.link_registry import LinkRegistry, check_password


__all__ = ['LinkRegistry', 'check_password']
