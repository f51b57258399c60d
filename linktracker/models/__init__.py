from linktracker.models.link_model import LinkModel


__all__ = ['LinkModel']
