import asyncio
import sys
import os

# Add project root to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bloghub.core.config import settings
from bloghub.core.permissions import ADMIN_ROLE
from bloghub.db.session import Database
from bloghub.schemas.user import SignupRequest
from bloghub.services.auth_service import create_user, get_user_by_email, promote_to_admin


async def create_admin(email, name, password):
    db = Database(settings)
    try:
        async with db.session_maker() as session:
            if await get_user_by_email(session, email):
                await promote_to_admin(session, email)
                await session.commit()
                print(f"Existing user '{email}' promoted to admin.")
                return

            user = await create_user(
                session,
                SignupRequest(name=name, email=email, password=password),
                role=ADMIN_ROLE,
            )
            await session.commit()
            print("Success: Admin created!")
            print(f"Email: {user.email}")
            print(f"Name: {user.name}")
    finally:
        await db.dispose()


if __name__ == "__main__":
    if len(sys.argv) < 4:
        print("Usage: python scripts/create_admin.py <email> <name> <password>")
        sys.exit(1)

    email = sys.argv[1]
    name = sys.argv[2]
    password = sys.argv[3]
    asyncio.run(create_admin(email, name, password))
