"""RSS 2.0 rendering for cartoon items."""

from datetime import UTC, date, datetime, time
from email.utils import format_datetime

from .logging_config import create_execution_logger
from .models import ChannelMeta, ContentItem

DUTCH_WEEKDAYS = [
    "maandag",
    "dinsdag",
    "woensdag",
    "donderdag",
    "vrijdag",
    "zaterdag",
    "zondag",
]

DUTCH_MONTHS = [
    "januari",
    "februari",
    "maart",
    "april",
    "mei",
    "juni",
    "juli",
    "augustus",
    "september",
    "oktober",
    "november",
    "december",
]


def escape_xml(value) -> str:
    """
    Escape the five XML special characters.

    Args:
        value: Value to escape (converted with ``str``; ``None`` gives "")

    Returns:
        Escaped text, safe inside elements, attributes and CDATA blocks
    """
    if value is None:
        return ""

    text = str(value)
    text = text.replace("&", "&amp;")
    text = text.replace("<", "&lt;")
    text = text.replace(">", "&gt;")
    text = text.replace('"', "&quot;")
    text = text.replace("'", "&apos;")

    return text


def to_datetime(day: date) -> datetime:
    """Midnight UTC on the given calendar date."""
    return datetime.combine(day, time(), tzinfo=UTC)


def rfc1123(moment: datetime) -> str:
    """Format an aware datetime like ``Mon, 01 Jan 2024 00:00:00 GMT``."""
    return format_datetime(moment.astimezone(UTC), usegmt=True)


def format_dutch_date(day: date) -> str:
    """Long-form Dutch date, e.g. ``maandag 1 januari 2024``."""
    return (
        f"{DUTCH_WEEKDAYS[day.weekday()]} {day.day} "
        f"{DUTCH_MONTHS[day.month - 1]} {day.year}"
    )


class FeedRenderer:
    """Serializes content items into an RSS 2.0 document."""

    def __init__(self, execution_id: str | None = None):
        """Initialize FeedRenderer.

        Args:
            execution_id: Execution ID for logging context
        """
        self.logger = create_execution_logger("renderer", execution_id)

    def render(
        self,
        items: list[ContentItem],
        channel: ChannelMeta,
        now: datetime | None = None,
    ) -> str:
        """
        Render the full feed document.

        Args:
            items: Items ordered newest first
            channel: Channel metadata for this run
            now: Build time (defaults to the current UTC time)

        Returns:
            RSS 2.0 XML text
        """
        now = now or datetime.now(UTC)
        pub_date = to_datetime(items[0].published_at) if items else now

        self.logger.info("Generating RSS feed", item_count=len(items))

        rendered_items = "\n".join(
            self.render_item(item, channel) for item in items
        )
        return (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom" '
            'xmlns:content="http://purl.org/rss/1.0/modules/content/" '
            'xmlns:media="http://search.yahoo.com/mrss/" '
            'xmlns:dc="http://purl.org/dc/elements/1.1/">\n'
            "    <channel>\n"
            f"{self.render_channel(channel, now, pub_date)}\n"
            f"{rendered_items}\n"
            "    </channel>\n"
            "</rss>\n"
        )

    def render_channel(
        self, channel: ChannelMeta, now: datetime, pub_date: datetime
    ) -> str:
        """Channel-level elements preceding the items."""
        contact = escape_xml(channel.contact)
        copyright_line = escape_xml(f"© {now.year} {channel.artist}. All rights reserved.")
        image_description = escape_xml(
            f"RSS feed for {channel.artist}'s educational cartoons"
        )
        categories = "\n".join(
            f"        <category>{escape_xml(category)}</category>"
            for category in channel.categories
        )

        return f"""        <title>{escape_xml(channel.title)}</title>
        <link>{escape_xml(channel.link)}</link>
        <description>{escape_xml(channel.description)}</description>
        <language>{escape_xml(channel.language)}</language>
        <copyright>{copyright_line}</copyright>
        <managingEditor>{contact}</managingEditor>
        <webMaster>{contact}</webMaster>
        <lastBuildDate>{rfc1123(now)}</lastBuildDate>
        <pubDate>{rfc1123(pub_date)}</pubDate>
        <ttl>{channel.ttl}</ttl>
        <generator>{escape_xml(channel.generator)}</generator>
        <docs>https://cyber.harvard.edu/rss/rss.html</docs>
        <atom:link href="{escape_xml(channel.self_link)}" rel="self" type="application/rss+xml"/>
        <image>
            <url>{escape_xml(channel.image_url)}</url>
            <title>{escape_xml(channel.title)}</title>
            <link>{escape_xml(channel.link)}</link>
            <width>{channel.image_size}</width>
            <height>{channel.image_size}</height>
            <description>{image_description}</description>
        </image>
{categories}
"""

    def render_item(self, item: ContentItem, channel: ChannelMeta) -> str:
        """A single ``<item>`` element."""
        url = escape_xml(item.url)
        title = escape_xml(item.title)
        description = escape_xml(item.description)
        published = to_datetime(item.published_at)
        author = escape_xml(channel.contact)
        categories = "\n".join(
            f"            <category>{escape_xml(category)}</category>"
            for category in channel.item_categories
        )

        return f"""        <item>
            <title>{title}</title>
            <link>{url}</link>
            <description><![CDATA[{self.render_summary_html(item, channel)}]]></description>
            <content:encoded><![CDATA[{self.render_content_html(item, channel)}]]></content:encoded>
            <pubDate>{rfc1123(published)}</pubDate>
            <dc:date>{published.isoformat()}</dc:date>
            <guid isPermaLink="true">{url}</guid>
            <enclosure url="{url}" type="image/jpeg" length="0"/>
            <media:content url="{url}" type="image/jpeg" medium="image">
                <media:title>{title}</media:title>
                <media:description>{description}</media:description>
                <media:keywords>{escape_xml(channel.keywords)}</media:keywords>
            </media:content>
{categories}
            <author>{author}</author>
            <source url="{escape_xml(channel.self_link)}">{escape_xml(channel.title)}</source>
        </item>"""

    def render_summary_html(self, item: ContentItem, channel: ChannelMeta) -> str:
        """Short HTML block for the item description."""
        artist = escape_xml(channel.artist)
        artist_url = escape_xml(channel.artist_url)
        return f"""
                <div style="max-width: 600px; margin: 0 auto; font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; line-height: 1.6;">
                    <p style="font-size: 16px; color: #333; margin-bottom: 20px; text-align: center;">
                        {escape_xml(item.description)}
                    </p>
                    <div style="text-align: center; margin: 20px 0;">
                        <img src="{escape_xml(item.url)}" alt="{escape_xml(item.title)}" style="max-width: 100%; height: auto; border-radius: 8px; box-shadow: 0 4px 12px rgba(0,0,0,0.15);" loading="lazy" />
                    </div>
                    <p style="font-size: 14px; color: #666; text-align: center; margin-top: 15px;">
                        <strong>🎨 Educational cartoon by <a href="{artist_url}" style="color: #007cba; text-decoration: none;">{artist}</a></strong>
                    </p>
                </div>
            """

    def render_content_html(self, item: ContentItem, channel: ChannelMeta) -> str:
        """Long HTML block for ``content:encoded``."""
        artist = escape_xml(channel.artist)
        artist_url = escape_xml(channel.artist_url)
        return f"""
                <div style="max-width: 800px; margin: 0 auto; font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;">
                    <header style="text-align: center; margin-bottom: 30px; padding: 20px; background: linear-gradient(135deg, #f8f9fa, #e9ecef); border-radius: 12px;">
                        <h1 style="color: #007cba; margin: 0 0 10px 0; font-size: 24px;">{escape_xml(item.title)}</h1>
                        <p style="color: #666; margin: 0; font-size: 16px;">📅 {format_dutch_date(item.published_at)}</p>
                    </header>
                    <div style="text-align: center; margin: 30px 0;">
                        <img src="{escape_xml(item.url)}" alt="{escape_xml(item.title)}" style="max-width: 100%; height: auto; border-radius: 12px; box-shadow: 0 8px 24px rgba(0,0,0,0.12);" loading="lazy" />
                    </div>
                    <div style="background: #f8f9fa; padding: 25px; border-radius: 12px; margin: 30px 0; border-left: 4px solid #007cba;">
                        <p style="font-size: 16px; line-height: 1.8; color: #333; margin: 0;">
                            {escape_xml(item.description)}
                        </p>
                    </div>
                    <footer style="text-align: center; margin-top: 40px; padding: 20px; background: #f1f3f4; border-radius: 12px;">
                        <p style="margin: 0; font-size: 14px; color: #666;">
                            🎓 <strong>About the Artist:</strong> <a href="{artist_url}" style="color: #007cba; text-decoration: none;">{artist}</a> creates educational cartoons that make complex scientific and mathematical concepts accessible through humor and visual storytelling.
                        </p>
                        <p style="margin: 10px 0 0 0; font-size: 12px; color: #888;">
                            📡 This content is delivered via an automated RSS feed. <a href="{escape_xml(channel.pages_url)}" style="color: #007cba;">Learn more</a>
                        </p>
                    </footer>
                </div>
            """
