import os
from app import app, db
from models.admin import Admin

if __name__ == "__main__":
    username = os.getenv("ADMIN_USERNAME", "admin")
    password = os.getenv("ADMIN_PASSWORD")

    with app.app_context():
        db.create_all()
        if not password:
            print("⚠️ Set ADMIN_PASSWORD before creating the admin account.")
        elif Admin.query.filter_by(username=username).first():
            print(f"⚠️ Admin account '{username}' already exists!")
        else:
            admin = Admin(username=username)
            admin.set_password(password)
            db.session.add(admin)
            db.session.commit()
            print(f"Admin account '{username}' created successfully!")
