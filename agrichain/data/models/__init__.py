#import modeli zeby SQLAlchemy je zarejestrowal w base metadata

from agrichain.data.models.document import DocumentModel

__all__ = ["DocumentModel"]
