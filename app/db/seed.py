"""Built-in dataset installed when the bundled resources cannot be loaded."""
from datetime import timedelta
from typing import List, NamedTuple

from app.models.base import Coordinates, utcnow
from app.models.conversation import Conversation, Message
from app.models.farm import Farm, MeatOffering
from app.models.request import DeliveryOption, Request
from app.models.user import User, UserRole


class SeedData(NamedTuple):
    users: List[User]
    farms: List[Farm]
    requests: List[Request]
    conversations: List[Conversation]


def build_seed() -> SeedData:
    now = utcnow()

    farmer1 = User(
        email="john@greenpastures.com",
        name="John Smith",
        role=UserRole.FARMER,
        location="Greenville, CA",
        phone="555-123-4567",
        bio="Third-generation family farm raising grass-fed beef and pastured pork since 1952.",
    )
    farmer2 = User(
        email="mary@hillsidefarm.com",
        name="Mary Johnson",
        role=UserRole.FARMER,
        location="Riverview, CA",
        phone="555-987-6543",
        bio="Sustainable farm specializing in heritage breed chickens and turkey.",
    )
    consumer1 = User(
        email="alex@example.com",
        name="Alex Rodriguez",
        role=UserRole.CONSUMER,
        location="San Francisco, CA",
        phone="555-234-5678",
        bio="Food enthusiast looking for high-quality, locally raised meat.",
    )
    consumer2 = User(
        email="sarah@example.com",
        name="Sarah Chen",
        role=UserRole.CONSUMER,
        location="Oakland, CA",
        phone="555-876-5432",
        bio="Health-conscious parent looking to buy in bulk for my family.",
    )

    farms = [
        Farm(
            name="Green Pastures Farm",
            owner_id=farmer1.id,
            location="Greenville, CA",
            coordinates=Coordinates(latitude=37.773972, longitude=-122.431297),
            description=(
                "Family-owned farm focused on sustainable practices. We raise grass-fed beef, "
                "pastured pork, and free-range chickens without antibiotics or hormones."
            ),
            meat_offerings=[
                MeatOffering(type="Beef", price=8.99, unit="per pound",
                             description="Grass-fed and finished beef, dry-aged for 21 days."),
                MeatOffering(type="Pork", price=7.50, unit="per pound",
                             description="Heritage breed pork raised on pasture and non-GMO feed."),
            ],
            rating=4.8,
            review_count=24,
            delivery_available=True,
            pickup_available=True,
        ),
        Farm(
            name="Hillside Poultry Farm",
            owner_id=farmer2.id,
            location="Riverview, CA",
            coordinates=Coordinates(latitude=37.733972, longitude=-122.391297),
            description=(
                "Specializing in pasture-raised poultry. Our birds are moved to fresh grass daily "
                "and have access to natural forage plus organic feed."
            ),
            meat_offerings=[
                MeatOffering(type="Chicken", price=6.99, unit="per pound",
                             description="Pasture-raised broilers, processed on farm."),
                MeatOffering(type="Turkey", price=9.50, unit="per pound",
                             description="Heritage breed turkeys, available seasonally."),
            ],
            rating=4.6,
            review_count=18,
            delivery_available=False,
            pickup_available=True,
        ),
    ]

    requests = [
        Request(
            consumer_id=consumer1.id,
            consumer_name=consumer1.name,
            meat_type="Beef",
            quantity=25,
            unit="pounds",
            budget=200,
            delivery_option=DeliveryOption.EITHER,
            preferred_time=now + timedelta(days=10),
            location="San Francisco, CA",
            coordinates=Coordinates(latitude=37.7749, longitude=-122.4194),
            additional_info="Looking for a mix of steaks, ground beef, and roasts.",
        ),
        Request(
            consumer_id=consumer2.id,
            consumer_name=consumer2.name,
            meat_type="Chicken",
            quantity=15,
            unit="pounds",
            budget=100,
            delivery_option=DeliveryOption.PICKUP,
            preferred_time=now + timedelta(days=5),
            location="Oakland, CA",
            coordinates=Coordinates(latitude=37.8044, longitude=-122.2711),
            additional_info="Prefer whole chickens if possible.",
        ),
    ]

    messages = [
        Message(
            sender_id=consumer1.id,
            receiver_id=farmer1.id,
            content="Hi, I'm interested in your beef. Do you have any quarter cow packages available?",
            timestamp=now - timedelta(hours=24),
        ),
        Message(
            sender_id=farmer1.id,
            receiver_id=consumer1.id,
            content="Yes, we have quarter cow packages available. They're about 110-125 pounds of meat for $850.",
            timestamp=now - timedelta(hours=23),
        ),
    ]
    conversations = [
        Conversation(
            participants=[farmer1.id, consumer1.id],
            messages=messages,
            last_message_timestamp=messages[-1].timestamp,
        )
    ]

    return SeedData(
        users=[farmer1, farmer2, consumer1, consumer2],
        farms=farms,
        requests=requests,
        conversations=conversations,
    )
