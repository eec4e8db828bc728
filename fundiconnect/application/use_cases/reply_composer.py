from __future__ import annotations

from fundiconnect.domain.entities.provider import CATEGORY_DISPLAY_NAMES, SERVICE_CATEGORIES, Provider
from fundiconnect.domain.entities.quotation import Quotation
from fundiconnect.domain.entities.reply import BotReply, ReplyButton

CATEGORY_EMOJI = {
    "plumbing": "🚰",
    "cleaning": "🧹",
    "electrical": "⚡",
    "beauty": "💄",
    "carpentry": "🪚",
    "tutoring": "📚",
    "masonry": "🧱",
}

# Indicative hourly ranges shown for pricing questions.
PRICE_GUIDE: dict[str, tuple[int, int]] = {
    "plumbing": (1200, 2500),
    "cleaning": (600, 1500),
    "electrical": (1500, 3000),
    "beauty": (2000, 5000),
    "carpentry": (1000, 2500),
    "tutoring": (1500, 3500),
    "masonry": (1800, 2800),
}

EXAMPLE_REQUESTS = (
    '"I need a plumber for a leaking pipe"',
    '"Looking for house cleaning in Westlands"',
    '"Need an electrician urgently"',
)


class ReplyComposer:
    """Builds channel-neutral replies. Channel formatters decide markup and buttons."""

    def __init__(
        self,
        business_name: str = "FundiConnect",
        website_url: str = "https://fundiconnect.com",
        support_url: str = "https://wa.me/254700000000",
        currency: str = "KSh",
    ) -> None:
        self._business_name = business_name
        self._website_url = website_url.rstrip("/")
        self._support_url = support_url
        self._currency = currency

    def greeting(self, user_name: str | None = None) -> BotReply:
        title = f"Hello {user_name}! Welcome to {self._business_name}!" if user_name else f"Welcome to {self._business_name}!"
        body = (
            "I'm your assistant for finding trusted service providers in Kenya. 🇰🇪\n\n"
            "🔧 Available services:\n"
            f"{_services_list()}\n\n"
            "Just tell me what you need! For example:\n"
            + "\n".join(EXAMPLE_REQUESTS[:2])
        )
        return BotReply(kind="text", title=title, body=body, buttons=self._category_buttons(with_website=True))

    def service_menu(self) -> BotReply:
        body = (
            "Just tell me what you need, for example:\n"
            + "\n".join(f"• {example}" for example in EXAMPLE_REQUESTS)
            + "\n\nOr pick a service below."
        )
        return BotReply(
            kind="text",
            title="What service are you looking for?",
            body=body,
            buttons=self._category_buttons(with_website=False),
        )

    def searching(self, service: str, location: str | None, urgent: bool) -> BotReply:
        where = f" in {location}" if location else ""
        flag = " (URGENT)" if urgent else ""
        return BotReply(
            kind="text",
            body=f"🔍 Sawa! Searching for {service} providers{where}{flag}...\n\nPlease wait while I find the best matches for you! ⏳",
        )

    def quotations(self, service: str, location: str | None, quotations: list[Quotation]) -> BotReply:
        where = f" in {location}" if location else ""
        count = len(quotations)
        rows: list[tuple[ReplyButton, ...]] = [
            (
                ReplyButton(label=f"📞 Call {q.provider_name}", action=f"call_{q.provider_id}"),
                ReplyButton(label=f"📅 Book {q.provider_name}", action=f"book_{q.provider_id}"),
            )
            for q in quotations
        ]
        rows.append(
            (
                ReplyButton(label="🌐 View All on Website", url=self._website_url),
                ReplyButton(label="🔄 Search Again", action="search_again"),
            )
        )
        return BotReply(
            kind="quotation",
            title=f"Found {count} excellent {service} providers{where}!",
            body="",
            quotations=tuple(quotations),
            buttons=tuple(rows),
            footer=(
                f"💡 Reply with a number (1-{count}) to get contact details, "
                f'or type "book <number>" to schedule an appointment.'
            ),
        )

    def no_matches(self, service: str, location: str | None) -> BotReply:
        where = f" in {location}" if location else ""
        return BotReply(
            kind="text",
            title=f"No {service} providers found{where}.",
            body=(
                "Would you like me to:\n"
                "• Expand the search area?\n"
                "• Look for a different service?\n"
                "• Show all available services?"
            ),
            buttons=(
                (
                    ReplyButton(label="🔍 Expand Search", action="expand_search"),
                    ReplyButton(label="🔄 Different Service", action="search_again"),
                ),
                (
                    ReplyButton(label="📋 All Services", action="show_services"),
                    ReplyButton(label="🌐 Visit Website", url=self._website_url),
                ),
            ),
        )

    def empty_marketplace(self, service: str) -> BotReply:
        return BotReply(
            kind="text",
            body=(
                f"I understand you're looking for {service} services! 🔍 "
                "Unfortunately we don't have any providers registered in the marketplace yet.\n\n"
                "We're actively recruiting service providers, so check back soon!"
            ),
            buttons=((ReplyButton(label="🌐 Visit Website", url=self._website_url),),),
        )

    def contact_for_quotation(self, quotation: Quotation, position: int) -> BotReply:
        return self._contact(
            provider_id=quotation.provider_id,
            name=quotation.provider_name,
            phone=quotation.phone,
            rating=quotation.rating,
            location=quotation.location,
            response_time=quotation.response_time,
            services=quotation.services,
            position=position,
        )

    def contact_for_provider(self, provider: Provider) -> BotReply:
        return self._contact(
            provider_id=provider.id,
            name=provider.name,
            phone=provider.phone,
            rating=provider.rating,
            location=provider.location,
            response_time=provider.response_time,
            services=provider.services,
            position=None,
        )

    def booking_assistant(self) -> BotReply:
        return BotReply(
            kind="text",
            title="Booking Assistant",
            body=(
                "📅 To complete your booking, I'll need:\n"
                "• Your preferred date and time\n"
                "• Service location address\n"
                "• Brief description of the work needed\n\n"
                f"🌐 For instant booking, visit: {self._website_url}\n"
                "📱 Or continue here by providing the details above"
            ),
        )

    def booking_for_provider(self, provider_id: str, name: str) -> BotReply:
        return BotReply(
            kind="text",
            title=f"Book {name}",
            body=(
                "✨ Quick booking options:\n\n"
                "🌐 Online booking (recommended)\n"
                "• Instant confirmation\n"
                "• Secure payment\n\n"
                "📱 Call direct\n"
                "• Immediate response\n"
                "• Custom arrangements"
            ),
            buttons=(
                (ReplyButton(label="🌐 Book Online Now", url=f"{self._website_url}/book/{provider_id}"),),
                (
                    ReplyButton(label="📞 Call Provider", action=f"call_{provider_id}"),
                    ReplyButton(label="💬 Chat Support", url=self._support_url),
                ),
                (ReplyButton(label="🔍 Find Other Providers", action="search_again"),),
            ),
        )

    def pricing_guide(self) -> BotReply:
        lines = []
        for category in SERVICE_CATEGORIES:
            low, high = PRICE_GUIDE[category]
            lines.append(
                f"{CATEGORY_EMOJI[category]} {CATEGORY_DISPLAY_NAMES[category]}: "
                f"{self._currency} {low:,} - {high:,}/hr"
            )
        return BotReply(
            kind="text",
            title=f"{self._business_name} Pricing Guide",
            body="Our rates vary by service and provider:\n\n" + "\n".join(lines),
            footer="💡 Get exact quotes by telling me what service you need!",
            buttons=(
                (
                    ReplyButton(label="🔍 Get Quote", action="get_quote"),
                    ReplyButton(label="🌐 View Website", url=self._website_url),
                ),
            ),
        )

    def get_quote(self) -> BotReply:
        return BotReply(
            kind="text",
            title="Get Instant Quote",
            body=(
                "Tell me what service you need and I'll get you personalised quotes from top providers!\n\n"
                'Example: "I need a plumber to fix a leaking pipe in my kitchen"'
            ),
        )

    def help(self) -> BotReply:
        return BotReply(
            kind="text",
            title=f"{self._business_name} Help Center",
            body=(
                "How to use this service:\n"
                "1. Tell me what service you need\n"
                "2. I'll find the best providers\n"
                "3. Get instant quotations\n"
                "4. Contact or book directly\n\n"
                "Example messages:\n"
                + "\n".join(f"• {example}" for example in EXAMPLE_REQUESTS)
                + f"\n\nNeed more help? Visit: {self._website_url}/help"
            ),
            buttons=(
                (
                    ReplyButton(label="🔍 Find Service", action="search_again"),
                    ReplyButton(label="💰 View Pricing", action="pricing"),
                ),
                (ReplyButton(label="🌐 Visit Website", url=self._website_url),),
            ),
        )

    def general(self) -> BotReply:
        return BotReply(
            kind="text",
            title="I'm here to help you find service providers!",
            body=(
                "Try asking for services like:\n"
                '• "I need a plumber"\n'
                '• "Looking for house cleaning"\n'
                '• "Need an electrician"\n'
                '• "Want a makeup artist"\n'
                '• "Need a carpenter"\n'
                '• "Looking for a tutor"\n'
                '• "Need a mason"\n\n'
                "What service can I help you find today? 🔍"
            ),
            buttons=self._category_buttons(with_website=False),
        )

    def invalid_selection(self, available: int) -> BotReply:
        if available:
            body = f"❌ Invalid selection. Please choose a number between 1 and {available}."
        else:
            body = "❌ Invalid selection. There are no quotations to choose from yet. Tell me what service you need first!"
        return BotReply(kind="text", body=body)

    def follow_up(self, service: str) -> BotReply:
        return BotReply(
            kind="followup",
            body=(
                f"👋 Hi! How did your {service} service go? We'd love to hear your feedback! ⭐\n\n"
                "Reply with a rating (1-5) and any comments."
            ),
        )

    def apology(self) -> BotReply:
        return BotReply(
            kind="text",
            body=f"🤖 Sorry, I encountered an error. Please try again or visit our website: {self._website_url}",
        )

    def _contact(
        self,
        provider_id: str,
        name: str,
        phone: str | None,
        rating: float,
        location: str,
        response_time: str,
        services: tuple[str, ...],
        position: int | None,
    ) -> BotReply:
        lines = [
            f"📱 Phone: {phone or 'Book online or contact support'}",
            f"⭐ Rating: {rating:.1f}/5.0",
            f"📍 Location: {location}",
            f"⏰ Response Time: {response_time}",
        ]
        if services:
            lines.append("")
            lines.append("🔧 Services offered:")
            lines.extend(f"• {service}" for service in services)
        how_to_book = f'type "book {position}"' if position else "use the buttons below"
        return BotReply(
            kind="contact",
            title=f"Contact {name}",
            body="\n".join(lines),
            footer=f"💡 To book: call directly or {how_to_book}.",
            buttons=(
                (
                    ReplyButton(label="📅 Book Online", url=f"{self._website_url}/book/{provider_id}"),
                    ReplyButton(label="🌐 View Profile", url=f"{self._website_url}/provider/{provider_id}"),
                ),
                (ReplyButton(label="🔍 Find Other Providers", action="search_again"),),
            ),
        )

    def _category_buttons(self, with_website: bool) -> tuple[tuple[ReplyButton, ...], ...]:
        buttons = [
            ReplyButton(
                label=f"{CATEGORY_EMOJI[category]} {CATEGORY_DISPLAY_NAMES[category]}",
                action=f"service_{category}",
            )
            for category in SERVICE_CATEGORIES
        ]
        if with_website:
            buttons.append(ReplyButton(label="🌐 Visit Website", url=self._website_url))
        return tuple(tuple(buttons[i : i + 2]) for i in range(0, len(buttons), 2))


def _services_list() -> str:
    return "\n".join(
        f"• {CATEGORY_EMOJI[category]} {CATEGORY_DISPLAY_NAMES[category]}" for category in SERVICE_CATEGORIES
    )
