from typing import List
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from gelato_ops.models.delivery.customer import Customer
from gelato_ops.schemas.delivery.delivery_plan_schema import CustomerCreate

class CustomerService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_customers(self) -> List[Customer]:
        result = await self.db.execute(
            select(Customer).where(Customer.is_active == True).order_by(Customer.name)
        )
        return list(result.scalars().all())

    async def get_existing_customer_ids(self, customer_ids: List[int]) -> set:
        if not customer_ids:
            return set()
        result = await self.db.execute(select(Customer.id).where(Customer.id.in_(customer_ids)))
        return set(result.scalars().all())

    async def create_customer(self, customer_data: CustomerCreate) -> Customer:
        customer = Customer(
            name=customer_data.name,
            type=customer_data.type.value,
            contact_name=customer_data.contact_name,
            phone=customer_data.phone,
            email=customer_data.email,
            address=customer_data.address,
        )
        self.db.add(customer)
        await self.db.commit()
        await self.db.refresh(customer)
        return customer
