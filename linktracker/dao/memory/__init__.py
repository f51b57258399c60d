from linktracker.dao.memory.link_memory_dao import LinkMemoryDAO


__all__ = ['LinkMemoryDAO']
