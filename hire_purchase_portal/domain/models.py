"""Domain models - immutable snapshots of the records returned by the backend API"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Generic, List, Optional, TypeVar


class ContractStatus(str, Enum):
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    DEFAULTED = "DEFAULTED"
    CANCELLED = "CANCELLED"


class InstallmentStatus(str, Enum):
    PENDING = "PENDING"
    PARTIAL = "PARTIAL"
    PAID = "PAID"
    OVERDUE = "OVERDUE"


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class PaymentFrequency(str, Enum):
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"


class InventoryStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    SOLD = "SOLD"
    RESERVED = "RESERVED"


class UserType(str, Enum):
    ADMIN = "admin"
    CUSTOMER = "customer"


@dataclass(frozen=True)
class User:
    """Identity shared by admins and customers"""

    id: str
    email: str
    first_name: str
    last_name: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class AdminUser(User):
    """Back-office user; permissions are checked client-side for display only"""

    role: str = ""
    permissions: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Customer(User):
    membership_id: str = ""
    phone: str = ""
    address: Optional[str] = None
    national_id: Optional[str] = None
    date_of_birth: Optional[date] = None
    is_activated: bool = False


@dataclass(frozen=True)
class ProductCategory:
    id: str
    name: str
    description: Optional[str] = None


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    base_price: Decimal
    category_id: str
    is_active: bool = True
    description: Optional[str] = None
    category: Optional[ProductCategory] = None


@dataclass(frozen=True)
class InventoryItem:
    """Serialised unit of stock"""

    id: str
    product_id: str
    serial_number: str
    status: InventoryStatus
    product: Optional[Product] = None
    lock_status: Optional[str] = None  # "LOCKED" or "UNLOCKED"
    registered_under: Optional[str] = None
    contract_id: Optional[str] = None


@dataclass(frozen=True)
class InstallmentSchedule:
    """Single scheduled payment within a contract"""

    id: str
    contract_id: str
    installment_no: int
    due_date: date
    amount: Decimal
    paid_amount: Decimal
    status: InstallmentStatus
    paid_at: Optional[datetime] = None


@dataclass(frozen=True)
class PaymentTransaction:
    """Payment posted against a contract"""

    id: str
    transaction_ref: str
    contract_id: str
    customer_id: str
    amount: Decimal
    payment_method: str
    status: PaymentStatus
    mobile_money_provider: Optional[str] = None
    mobile_money_number: Optional[str] = None
    external_ref: Optional[str] = None
    payment_date: Optional[datetime] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class HirePurchaseContract:
    """Hire-purchase contract; outstanding_balance == total_price - total_paid is kept by the backend"""

    id: str
    contract_number: str
    customer_id: str
    total_price: Decimal
    deposit_amount: Decimal
    finance_amount: Decimal
    installment_amount: Decimal
    payment_frequency: PaymentFrequency
    total_installments: int
    grace_period_days: int
    penalty_percentage: Decimal
    start_date: date
    end_date: date
    status: ContractStatus
    total_paid: Decimal
    outstanding_balance: Decimal
    ownership_transferred: bool = False
    customer: Optional[Customer] = None
    inventory_item: Optional[InventoryItem] = None
    installments: List[InstallmentSchedule] = field(default_factory=list)
    payments: List[PaymentTransaction] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class LoginResponse:
    token: str
    user: User


@dataclass(frozen=True)
class Pagination:
    page: int
    limit: int
    total: int
    total_pages: int


T = TypeVar("T")


@dataclass(frozen=True)
class PaginatedResponse(Generic[T]):
    data: List[T]
    pagination: Pagination


@dataclass(frozen=True)
class PlannedInstallment:
    """Installment in a schedule preview, before the contract exists"""

    installment_no: int
    due_date: date
    amount: Decimal
