from .projection import CardView, project_cards

__all__ = ["CardView",
           "project_cards",
           ]
