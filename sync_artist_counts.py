from app import app
from models import Artist
from services.artists import reconcile_artist_counts

if __name__ == "__main__":
    with app.app_context():
        print("🔄 Recomputing artist counters from the arts table...")

        fixed = reconcile_artist_counts()
        for artist in Artist.query.order_by(Artist.full_name).all():
            print(f" - {artist.full_name}: {artist.arts_uploaded} uploaded, {artist.arts_sold} sold")

        print(f"✅ Counters in sync ({fixed} artist(s) corrected).")
