from linktracker.dao.base.link_base_dao import LinkBaseDAO


__all__ = ['LinkBaseDAO']
