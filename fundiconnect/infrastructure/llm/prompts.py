from fundiconnect.domain.entities.intent import Intent
from fundiconnect.domain.entities.provider import SERVICE_CATEGORIES
from fundiconnect.application.utils.message_rules import NAIROBI_AREAS


def build_classify_prompt(text: str) -> str:
    intents = ", ".join(i.value for i in Intent)
    services = ", ".join(SERVICE_CATEGORIES)
    areas = ", ".join(NAIROBI_AREAS[:12])

    return (
        "You classify customer messages for FundiConnect, a service marketplace in Kenya.\n"
        "Return ONLY valid JSON. No markdown. No extra text.\n"
        "Output schema:\n"
        "  {\"intent\": \"...\", \"service\": \"...\" | null, \"location\": \"...\" | null,\n"
        "   \"urgent\": true | false, \"budget\": 1500 | null, \"confidence\": 0.0-1.0}\n"
        "Rules:\n"
        f"  - intent must be one of: {intents}.\n"
        f"  - service must be one of: {services}; or null when no service is asked for.\n"
        "  - intent is service_request whenever a service is identified.\n"
        "  - location is the area the customer names, keep their spelling; null if none.\n"
        f"  - Common Nairobi areas: {areas}.\n"
        "  - urgent is true for words like urgent, emergency, asap, now, today, quickly.\n"
        "  - budget is an amount in KSh as an integer, without separators; null if none.\n"
        "  - Messages may mix English and Swahili (e.g. \"jambo\", \"habari\").\n"
        "\n"
        "Customer message:\n"
        f"{text}\n"
    )
