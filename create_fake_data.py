import random
from datetime import datetime, timedelta
from decimal import Decimal
from extensions import db
from app import app
from models import Artist, ArtistApplication, Artwork
from services.applications import update_application_status
from services.artists import reconcile_artist_counts

# ====== CONFIG ======
NUM_APPLICATIONS = 12
ARTWORKS_PER_ARTIST = (2, 8)
CATEGORIES = ["Painting", "Sketch", "Watercolor", "Digital", "Calligraphy", "Portrait"]
# =====================

FIRST_NAMES = ["Arjun", "Mira", "Kabir", "Sana", "Ishaan", "Anaya", "Rohan", "Tara", "Vihaan", "Leela"]
LAST_NAMES = ["Sharma", "Verma", "Patel", "Rao", "Iyer", "Das", "Menon", "Kapoor"]
CITIES = [("Pune", "Kothrud"), ("Mumbai", "Andheri"), ("Delhi", "Saket"), ("Jaipur", "Malviya Nagar")]
TITLES = ["Monsoon", "Old Harbour", "Quiet Street", "Lotus Pond", "City Lights", "Dusk", "Market Day", "Blue Hills"]


def random_date(days_back=120):
    """Random moment within the last `days_back` days."""
    return datetime.now() - timedelta(days=random.randint(0, days_back), minutes=random.randint(0, 1440))


def create_applications():
    print("📝 Creating artist applications...")

    created = []
    for i in range(NUM_APPLICATIONS):
        first, last = random.choice(FIRST_NAMES), random.choice(LAST_NAMES)
        city, district = random.choice(CITIES)
        email = f"{first}.{last}.{i}@example.com".lower()
        if ArtistApplication.query.filter_by(email=email).first():
            continue
        application = ArtistApplication(
            full_name=f"{first} {last}",
            age=random.randint(16, 45),
            started_art_at=str(random.randint(5, 20)),
            city=city,
            district=district,
            email=email,
            phone=f"9{random.randint(100000000, 999999999)}",
            socials={"instagram": f"@{first.lower()}_{last.lower()}_art"},
            bio=f"{first} works mostly in {random.choice(CATEGORIES).lower()}.",
            status="pending",
            received_date=random_date(),
        )
        created.append(application)

    db.session.add_all(created)
    db.session.commit()
    print(f"✅ Created {len(created)} applications.")
    return created


def approve_some(created):
    print("🎨 Approving applications...")

    approved = []
    for application in created[: len(created) * 2 // 3]:
        outcome = update_application_status(application.id, "approved", reviewer="seed")
        if outcome.fully_succeeded and outcome.cascade_done:
            approved.append(outcome.value.email)
    print(f"✅ Approved {len(approved)} applications into artists.")
    return approved


def create_artworks():
    print("🖼️ Creating artworks...")

    artworks = []
    for artist in Artist.query.filter_by(status="active").all():
        for _ in range(random.randint(*ARTWORKS_PER_ARTIST)):
            artworks.append(Artwork(
                artist_id=artist.id,
                art_name=f"{random.choice(TITLES)} {random.randint(1, 99)}",
                art_category=random.choice(CATEGORIES),
                cost=Decimal(random.randint(20, 400) * 50),
                art_image="placeholder.jpg",
                art_description="Seed artwork",
                work_hours=str(random.randint(2, 60)),
                size_of_art=random.choice(["A4", "A3", "12x16 in", "24x36 in"]),
                color_type=random.choice(Artwork.COLOR_TYPES),
                status=random.choices(["listed", "sold", "delivered"], weights=[6, 2, 1])[0],
                uploaded_at=random_date(),
            ))

    db.session.add_all(artworks)
    db.session.commit()
    # Bulk rows skip the per-write counter updates
    fixed = reconcile_artist_counts()
    print(f"✅ Created {len(artworks)} artworks, counters set for {fixed} artist(s).")


if __name__ == "__main__":
    with app.app_context():
        db.create_all()
        print("🚀 Seeding demo gallery data...\n")

        created = create_applications()
        approve_some(created)
        create_artworks()

        print("\n🎉 Demo data ready.")
