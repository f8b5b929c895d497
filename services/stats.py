import io
from datetime import date, datetime

import pandas as pd

from models import Artist, ArtistApplication, Artwork, ContactMessage, Order
from services.page_views import total_views, views_on

PROCESSING_STATUSES = ("seen", "contacted", "sold")


def dashboard_stats():
    return {
        "total_artists": Artist.query.filter(Artist.status != "deleted").count(),
        "total_artworks": Artwork.query.filter(Artwork.status != "deleted").count(),
        "artworks_sold": Artwork.query.filter(Artwork.status.in_(Artwork.SOLD_STATUSES)).count(),
        "total_orders": Order.query.count(),
        "new_orders": Order.query.filter_by(status="placed").count(),
        "processing_orders": Order.query.filter(Order.status.in_(PROCESSING_STATUSES)).count(),
        "total_messages": ContactMessage.query.count(),
        "unread_messages": ContactMessage.query.filter_by(status="unread").count(),
        "total_views": total_views(),
        "today_views": views_on(date.today()),
        "pending_applications": ArtistApplication.query.filter_by(status="pending").count(),
    }


def site_stats():
    return {
        "total_views": total_views(),
        "today_views": views_on(date.today()),
        "listed_artworks": (
            Artwork.query.join(Artist, Artwork.artist_id == Artist.id)
            .filter(Artwork.status == "listed", Artist.status == "active")
            .count()
        ),
        "active_artists": Artist.query.filter_by(status="active").count(),
    }


def export_orders_excel():
    """Build the dashboard workbook; returns (buffer, filename)."""
    stats = dashboard_stats()
    df_summary = pd.DataFrame([
        {"Item": "Artists", "Count": stats["total_artists"]},
        {"Item": "Artworks", "Count": stats["total_artworks"]},
        {"Item": "Artworks sold", "Count": stats["artworks_sold"]},
        {"Item": "Orders", "Count": stats["total_orders"]},
        {"Item": "New orders", "Count": stats["new_orders"]},
        {"Item": "Processing orders", "Count": stats["processing_orders"]},
        {"Item": "Unread messages", "Count": stats["unread_messages"]},
        {"Item": "Page views", "Count": stats["total_views"]},
    ])

    orders = Order.query.order_by(Order.creation_date_time.desc(), Order.id.desc()).all()
    df_orders = pd.DataFrame([{
        "Order ID": o.order_id,
        "Customer": o.customer_name,
        "Phone": o.customer_phone,
        "Email": o.customer_email,
        "Address": o.shipping_address,
        "Items": o.item_count,
        "Total": float(o.total_amount or 0),
        "Status": o.status,
        "Placed": o.creation_date_time.strftime("%d/%m/%Y %H:%M") if o.creation_date_time else "",
        "Delivered": o.delivered_date_time.strftime("%d/%m/%Y %H:%M") if o.delivered_date_time else "",
    } for o in orders], columns=[
        "Order ID", "Customer", "Phone", "Email", "Address",
        "Items", "Total", "Status", "Placed", "Delivered",
    ])

    lines = []
    for o in orders:
        for item in o.item_list or []:
            lines.append({
                "Order ID": o.order_id,
                "Artwork": item.get("art_name"),
                "Artist": item.get("artist_name"),
                "Unit price": item.get("unit_price"),
                "Quantity": item.get("quantity"),
                "Line total": item.get("line_total"),
            })
    df_lines = pd.DataFrame(lines, columns=[
        "Order ID", "Artwork", "Artist", "Unit price", "Quantity", "Line total",
    ])

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="xlsxwriter") as writer:
        df_summary.to_excel(writer, index=False, sheet_name="Summary")
        df_orders.to_excel(writer, index=False, sheet_name="Orders")
        df_lines.to_excel(writer, index=False, sheet_name="Order items")

        workbook = writer.book
        worksheet = writer.sheets["Summary"]
        header_format = workbook.add_format({"bold": True, "bg_color": "#CCE5FF", "border": 1})
        for col_num, value in enumerate(df_summary.columns.values):
            worksheet.write(0, col_num, value, header_format)

    output.seek(0)
    filename = f"Gallery_orders_{datetime.now().strftime('%Y-%m-%d_%H-%M')}.xlsx"
    return output, filename
