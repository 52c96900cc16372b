import click
from pageflow.extensions import db
from pageflow.domain.roles import Role
from pageflow.models.user import User


def register_cli(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables (use `flask db upgrade` once migrations exist)."""
        db.create_all()
        click.echo("Database tables created")

    @app.cli.command("seed-users")
    @click.option("--password", default="password123", show_default=True)
    def seed_users(password):
        """Create one demo user per role: admin, maker, checker."""
        for role in Role:
            user = User.query.filter_by(username=role.value).first()
            if user is None:
                user = User()
                user.username = role.value
                db.session.add(user)

            user.role = role.value
            user.is_active = True
            user.set_password(password)

        db.session.commit()
        click.echo(f"Seeded users: {', '.join(r.value for r in Role)}")
