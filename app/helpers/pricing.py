"""Plans shown on the public pricing page."""

PRICING_PLANS = [
    {
        "name": "Free",
        "description": "A simpler way to chat and collaborate",
        "price": "RM0",
        "period": "free forever",
        "button_text": "GET STARTED",
        "button_url": "/clienthub",
        "is_free": True,
        "features": [
            "90 days of message history",
            "Up to 10 apps",
            "1:1 meetings",
        ],
    },
    {
        "name": "Pro",
        "description": "Drive productivity in one place",
        "price": "RM35",
        "period": "per user / month, when paying monthly",
        "button_text": "TRY NOW",
        "button_url": "/clienthub",
        "is_recommended": True,
        "features": [
            "Unlimited message history",
            "Unlimited app integrations",
            "Group meetings",
        ],
    },
    {
        "name": "Enterprise+",
        "description": "Maximize performance on the most comprehensive work OS",
        "price": "",
        "period": "Contact sales for pricing",
        "button_text": "CONTACT SALES",
        "button_url": "/request",
        "is_enterprise": True,
        "features": [
            "Unlimited message history",
            "Unlimited app integrations",
            "Group meetings",
        ],
    },
]
