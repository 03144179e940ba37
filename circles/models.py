import uuid
from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash
from flask_login import UserMixin
from circles.extensions import db


def _iso(value):
    return value.isoformat() if value else None


# ============================================================
# USER MODEL
# ============================================================
class User(UserMixin, db.Model):
    """
    Represents a registered user in the system.
    Clients only ever see ext_id, never the internal id.
    """
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    ext_id = db.Column(db.String(36), unique=True, nullable=False,
                       default=lambda: str(uuid.uuid4()))
    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    # Only changes together with a Circle insert, see claim_circle_slot
    owned_circles = db.Column(db.Integer, default=0, server_default='0', nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    memberships = db.relationship('CircleMember', backref='user', lazy='dynamic')

    def set_password(self, password):
        """Hash and set the user's password."""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        """Verify password against stored hash."""
        return check_password_hash(self.password_hash, password)

    def get_id(self):
        return self.ext_id

    def to_dict(self):
        return {
            'extId': self.ext_id,
            'email': self.email,
            'firstName': self.first_name,
            'lastName': self.last_name,
        }

    def __repr__(self):
        return f'<User {self.email}>'


# ============================================================
# CIRCLE MODEL
# ============================================================
class Circle(db.Model):
    """
    A group of users sharing bills and budgets.
    Deleting a circle removes its memberships, bills and budgets.
    """
    __tablename__ = 'circles'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(56), nullable=False)
    created_by = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    members = db.relationship('CircleMember', backref='circle', lazy='dynamic',
                              cascade='all, delete-orphan')
    bills = db.relationship('Bill', backref='circle', lazy='dynamic',
                            cascade='all, delete-orphan')
    budgets = db.relationship('Budget', backref='circle', lazy='dynamic',
                              cascade='all, delete-orphan')

    def __repr__(self):
        return f'<Circle {self.name}>'


# ============================================================
# CIRCLE MEMBER MODEL
# ============================================================
class CircleMember(db.Model):
    """
    Membership of a user in a circle.
    A row here is the only thing that grants access to the circle's
    bills and budgets.
    """
    __tablename__ = 'circle_members'

    id = db.Column(db.Integer, primary_key=True)
    circle_id = db.Column(db.Integer, db.ForeignKey('circles.id'), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    is_owner = db.Column(db.Boolean, default=False, nullable=False)
    joined_at = db.Column(db.DateTime, nullable=True)

    # Prevent duplicate memberships
    __table_args__ = (
        db.UniqueConstraint('circle_id', 'user_id', name='unique_circle_member'),
    )

    def to_dict(self):
        return {
            'extId': self.user.ext_id,
            'firstName': self.user.first_name,
            'lastName': self.user.last_name,
            'isOwner': self.is_owner,
            'joinedAt': _iso(self.joined_at),
        }

    def __repr__(self):
        return f'<CircleMember user={self.user_id} circle={self.circle_id}>'


# ============================================================
# BILL CATEGORY MODEL
# ============================================================
class BillCategory(db.Model):
    """Lookup data shared by every circle."""
    __tablename__ = 'bill_categories'

    id = db.Column(db.Integer, primary_key=True)
    category_name = db.Column(db.String(100), unique=True, nullable=False)

    def to_dict(self):
        return {'id': self.id, 'categoryName': self.category_name}

    def __repr__(self):
        return f'<BillCategory {self.category_name}>'


# ============================================================
# BILL MODEL
# ============================================================
class Bill(db.Model):
    """
    An expense recorded by a member of a circle.
    Bills are never updated once recorded.
    """
    __tablename__ = 'bills'

    id = db.Column(db.Integer, primary_key=True)
    circle_id = db.Column(db.Integer, db.ForeignKey('circles.id'), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    bill_name = db.Column(db.String(120), nullable=False)
    bill_amount = db.Column(db.Float, nullable=False)
    bill_category_id = db.Column(db.Integer, db.ForeignKey('bill_categories.id'),
                                 nullable=False)
    bill_date = db.Column(db.Date, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    category = db.relationship('BillCategory')

    def to_dict(self):
        return {
            'id': self.id,
            'billName': self.bill_name,
            'billAmount': self.bill_amount,
            'billCategoryId': self.bill_category_id,
            'categoryName': self.category.category_name if self.category else None,
            'billDate': _iso(self.bill_date),
        }

    def __repr__(self):
        return f'<Bill {self.bill_name} amount={self.bill_amount}>'


# ============================================================
# BUDGET MODEL
# ============================================================
class Budget(db.Model):
    """A spending plan for a circle over a date range."""
    __tablename__ = 'budgets'

    id = db.Column(db.Integer, primary_key=True)
    circle_id = db.Column(db.Integer, db.ForeignKey('circles.id'), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    budget_name = db.Column(db.String(120), nullable=False)
    budget_amount = db.Column(db.Float, nullable=False)
    budget_start_date = db.Column(db.Date, nullable=False)
    budget_end_date = db.Column(db.Date, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'budgetName': self.budget_name,
            'budgetAmount': self.budget_amount,
            'budgetStartDate': _iso(self.budget_start_date),
            'budgetEndDate': _iso(self.budget_end_date),
        }

    def __repr__(self):
        return f'<Budget {self.budget_name} amount={self.budget_amount}>'
