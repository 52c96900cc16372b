from werkzeug.security import generate_password_hash, check_password_hash
from pageflow.extensions import db
from pageflow.domain.roles import Actor, Role
from .base import BaseModel

class User(BaseModel):
    __tablename__ = 'users'

    username = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)

    role = db.Column(db.String(20), nullable=False, default=Role.MAKER.value)
    is_active = db.Column(db.Boolean, default=True)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def to_actor(self) -> Actor:
        return Actor(actor_id=self.id, role=Role(self.role))
