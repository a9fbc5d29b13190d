#!/usr/bin/env python3
"""
Database Seed Script
Populate local test data into the database

Features:
1. Create Tables - create every escrow table if missing
2. Create Users - 1 organizer + 2 buyers
3. Create Tickets - available tickets for one event, owned by the organizer

Notes:
- Ticket validation is owned by the venue check-in system; flip a ticket to
  `validated` directly in the database to exercise escrow release locally
"""

import asyncio
from dataclasses import dataclass
import os

from sqlalchemy import func, select

from src.platform.database.orm_db_setting import (
    create_db_and_tables,
    dispose_engine,
    get_session_maker,
)
from src.service.escrow.domain.enum import TicketStatus, UserRole
from src.service.escrow.driven_adapter.model import TicketModel, UserModel


EVENT_ID = int(os.getenv('EVENT_ID', '1'))
TICKET_COUNT = int(os.getenv('TICKET_COUNT', '10'))
TICKET_PRICE = int(os.getenv('TICKET_PRICE', '2000'))


@dataclass
class UserConfig:
    """User seed configuration"""

    email: str
    name: str
    role: UserRole


TEST_USERS = [
    UserConfig(email='o@t.com', name='init organizer', role=UserRole.ORGANIZER),
    UserConfig(email='b@t.com', name='init buyer', role=UserRole.BUYER),
    UserConfig(email='b_1@t.com', name='second buyer', role=UserRole.BUYER),
]


async def create_users(session) -> int:
    """Create initial test users

    Returns:
        int: organizer_id
    """
    print(f'👥 Creating {len(TEST_USERS)} users...')

    organizer_id = None
    for config in TEST_USERS:
        result = await session.execute(select(UserModel).where(UserModel.email == config.email))
        user = result.scalar_one_or_none()
        if user is None:
            user = UserModel(email=config.email, name=config.name, role=config.role.value)
            session.add(user)
            await session.flush()
            print(f'   ✅ Created {config.role}: ID={user.id}, Email={user.email}')
        else:
            print(f'   ⏭️  Exists {config.role}: ID={user.id}, Email={user.email}')

        if config.role == UserRole.ORGANIZER:
            organizer_id = user.id

    if organizer_id is None:
        raise RuntimeError('Failed to create organizer: ID is None')

    return organizer_id


async def create_tickets(session, organizer_id: int) -> None:
    """Create available tickets for the seed event"""
    print(f'🎫 Creating {TICKET_COUNT} tickets for event {EVENT_ID}...')

    session.add_all(
        TicketModel(
            event_id=EVENT_ID,
            organizer_id=organizer_id,
            price=TICKET_PRICE,
            status=TicketStatus.AVAILABLE.value,
        )
        for _ in range(TICKET_COUNT)
    )
    await session.flush()
    print(f'   ✅ Created tickets at price {TICKET_PRICE}')


async def verify_data() -> None:
    """Verify seeded data"""
    print('🔍 Verifying seeded data...')

    async with get_session_maker()() as session:
        for model in (UserModel, TicketModel):
            result = await session.execute(select(func.count()).select_from(model))
            print(f'   {model.__tablename__.capitalize()} count: {result.scalar()}')

        result = await session.execute(select(UserModel).order_by(UserModel.id))
        for user in result.scalars():
            print(f'      User ID={user.id}, Email={user.email}, Role={user.role}')

    print('   ✅ Data verification completed!')


async def _seed_data() -> None:
    """Seed users and tickets in a single transaction"""
    async with get_session_maker()() as session:
        try:
            organizer_id = await create_users(session)
            print()

            await create_tickets(session, organizer_id)
            print()

            await session.commit()
            print('✅ All data committed successfully!')

        except Exception as e:
            await session.rollback()
            print(f'❌ Rolling back: {e}')
            raise


async def main() -> None:
    print('🌱 Starting data seeding...')
    print('=' * 50)

    try:
        await create_db_and_tables()
        await _seed_data()
        await verify_data()

        print()
        print('=' * 50)
        print('🌱 Data seeding completed!')
        print('📋 Test accounts:')
        for config in TEST_USERS:
            print(f'   {config.role}: {config.email}')
    finally:
        await dispose_engine()


if __name__ == '__main__':
    asyncio.run(main())
