from ..extensions import db
from ..utils.timezone_utils import TimezoneUtils
from .inventory import _new_id


class Item(db.Model):
    __tablename__ = 'item'
    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    inventory_id = db.Column(
        db.String(36), db.ForeignKey('inventory.id', ondelete='CASCADE'), nullable=False, index=True
    )
    custom_id = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(200), nullable=True)
    version = db.Column(db.Integer, nullable=False, default=0)  # optimistic concurrency token
    created_at = db.Column(db.DateTime, default=TimezoneUtils.utc_now)
    updated_at = db.Column(db.DateTime, default=TimezoneUtils.utc_now, onupdate=TimezoneUtils.utc_now)

    inventory = db.relationship('Inventory', back_populates='items')

    # The only real uniqueness guarantee for generated custom IDs
    __table_args__ = (
        db.UniqueConstraint('inventory_id', 'custom_id', name='uq_item_inventory_custom_id'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'inventory_id': self.inventory_id,
            'custom_id': self.custom_id,
            'name': self.name,
            'version': self.version,
            'created_at': TimezoneUtils.to_api_timestamp(self.created_at),
        }

    def __repr__(self):
        return f'<Item {self.custom_id!r} in {self.inventory_id}>'
