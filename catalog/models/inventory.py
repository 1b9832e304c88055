import uuid

from ..extensions import db
from ..utils.timezone_utils import TimezoneUtils


def _new_id() -> str:
    return str(uuid.uuid4())


class Inventory(db.Model):
    """A collection of items sharing one custom ID format"""
    __tablename__ = 'inventory'
    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    # JSON document: {"Elements": [{"Type": ..., "Value": ..., "Format": ...}]}
    custom_id_format = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=TimezoneUtils.utc_now)
    updated_at = db.Column(db.DateTime, default=TimezoneUtils.utc_now, onupdate=TimezoneUtils.utc_now)

    items = db.relationship('Item', back_populates='inventory', cascade='all, delete-orphan', lazy='dynamic')

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'custom_id_format': self.custom_id_format,
            'created_at': TimezoneUtils.to_api_timestamp(self.created_at),
        }

    def __repr__(self):
        return f'<Inventory {self.id} {self.title!r}>'
