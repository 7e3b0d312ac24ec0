"""Translation model: the server-side source of truth for UI strings."""
from datetime import datetime
from physicshub import db


class Translation(db.Model):
    """One UI string in one language."""
    __tablename__ = 'translations'
    
    id = db.Column(db.Integer, primary_key=True)
    language = db.Column(db.String(5), nullable=False, index=True)  # 'en' or 'vn'
    key = db.Column(db.String(64), nullable=False)  # e.g. 'noticeBoard'
    value = db.Column(db.Text, nullable=False, default='')
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    __table_args__ = (
        db.UniqueConstraint('language', 'key', name='unique_translation_key'),
    )
    
    def to_dict(self):
        """Convert translation to dictionary."""
        return {
            'language': self.language,
            'key': self.key,
            'value': self.value,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }
    
    def __repr__(self):
        return f'<Translation {self.language}.{self.key}>'
