import sys

from strengthlab import create_app
from strengthlab.extensions import db
from strengthlab.models import User

app = create_app()

with app.app_context():
    username = sys.argv[1] if len(sys.argv) > 1 else "student1"
    email = sys.argv[2] if len(sys.argv) > 2 else f"{username}@example.com"
    role = sys.argv[3] if len(sys.argv) > 3 else "student"  # student, admin

    existing_user = User.query.filter_by(email=email).first()
    if existing_user:
        print(f"User with email '{email}' already exists (id={existing_user.id}).")
    else:
        user = User(username=username, email=email, role=role)
        db.session.add(user)
        db.session.commit()

        print(f"{role.capitalize()} created successfully!")
        print(f"id: {user.id}")
        print(f"email: {email}")
