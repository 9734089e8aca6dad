"""Translation between backend JSON (camelCase) and domain models"""

from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, TypeVar

from hire_purchase_portal.domain.exceptions import InvalidPayloadError
from hire_purchase_portal.domain.models import (
    AdminUser,
    ContractStatus,
    Customer,
    HirePurchaseContract,
    InstallmentSchedule,
    InstallmentStatus,
    InventoryItem,
    InventoryStatus,
    LoginResponse,
    PaginatedResponse,
    Pagination,
    PaymentFrequency,
    PaymentStatus,
    PaymentTransaction,
    Product,
    ProductCategory,
    User,
    UserType,
)
from hire_purchase_portal.utils.date_utils import parse_date, parse_optional_datetime

T = TypeVar("T")
Payload = Dict[str, Any]


def _money(value: Any) -> Decimal:
    return Decimal(str(value if value is not None else 0))


def _optional(data: Optional[Payload], parser: Callable[[Payload], T]) -> Optional[T]:
    return parser(data) if data else None


def parse_admin_user(data: Payload) -> AdminUser:
    return AdminUser(
        id=data["id"],
        email=data["email"],
        first_name=data.get("firstName", ""),
        last_name=data.get("lastName", ""),
        role=data.get("role", ""),
        permissions=list(data.get("permissions") or []),
    )


def parse_customer(data: Payload) -> Customer:
    return Customer(
        id=data["id"],
        email=data.get("email") or "",
        first_name=data.get("firstName", ""),
        last_name=data.get("lastName", ""),
        membership_id=data.get("membershipId", ""),
        phone=data.get("phone", ""),
        address=data.get("address"),
        national_id=data.get("nationalId"),
        date_of_birth=parse_date(data["dateOfBirth"]) if data.get("dateOfBirth") else None,
        is_activated=bool(data.get("isActivated", False)),
    )


def parse_user(data: Payload, user_type: UserType) -> User:
    if user_type is UserType.ADMIN:
        return parse_admin_user(data)
    return parse_customer(data)


def user_to_payload(user: User) -> Payload:
    """Inverse of parse_user, used to persist the signed-in identity"""
    payload: Payload = {
        "id": user.id,
        "email": user.email,
        "firstName": user.first_name,
        "lastName": user.last_name,
    }
    if isinstance(user, AdminUser):
        payload.update(role=user.role, permissions=list(user.permissions))
    elif isinstance(user, Customer):
        payload.update(
            membershipId=user.membership_id,
            phone=user.phone,
            address=user.address,
            nationalId=user.national_id,
            dateOfBirth=user.date_of_birth.isoformat() if user.date_of_birth else None,
            isActivated=user.is_activated,
        )
    return payload


def parse_login_response(data: Payload, user_type: UserType) -> LoginResponse:
    return LoginResponse(token=data["token"], user=parse_user(data["user"], user_type))


def parse_category(data: Payload) -> ProductCategory:
    return ProductCategory(id=data["id"], name=data["name"], description=data.get("description"))


def parse_product(data: Payload) -> Product:
    category = data.get("category")
    return Product(
        id=data["id"],
        name=data["name"],
        base_price=_money(data.get("basePrice")),
        category_id=data.get("categoryId", ""),
        is_active=bool(data.get("isActive", True)),
        description=data.get("description"),
        category=parse_category(category) if isinstance(category, dict) else None,
    )


def parse_inventory_item(data: Payload) -> InventoryItem:
    return InventoryItem(
        id=data["id"],
        product_id=data.get("productId", ""),
        serial_number=data["serialNumber"],
        status=InventoryStatus(data["status"]),
        product=_optional(data.get("product"), parse_product),
        lock_status=data.get("lockStatus"),
        registered_under=data.get("registeredUnder"),
        contract_id=data.get("contractId"),
    )


def parse_installment(data: Payload) -> InstallmentSchedule:
    return InstallmentSchedule(
        id=data["id"],
        contract_id=data["contractId"],
        installment_no=int(data["installmentNo"]),
        due_date=parse_date(data["dueDate"]),
        amount=_money(data["amount"]),
        paid_amount=_money(data.get("paidAmount")),
        status=InstallmentStatus(data.get("status", "PENDING")),
        paid_at=parse_optional_datetime(data.get("paidAt")),
    )


def parse_payment(data: Payload) -> PaymentTransaction:
    return PaymentTransaction(
        id=data["id"],
        transaction_ref=data["transactionRef"],
        contract_id=data["contractId"],
        customer_id=data["customerId"],
        amount=_money(data["amount"]),
        payment_method=data.get("paymentMethod", ""),
        status=PaymentStatus(data["status"]),
        mobile_money_provider=data.get("mobileMoneyProvider"),
        mobile_money_number=data.get("mobileMoneyNumber"),
        external_ref=data.get("externalRef"),
        payment_date=parse_optional_datetime(data.get("paymentDate")),
        created_at=parse_optional_datetime(data.get("createdAt")),
    )


def parse_contract(data: Payload) -> HirePurchaseContract:
    return HirePurchaseContract(
        id=data["id"],
        contract_number=data["contractNumber"],
        customer_id=data["customerId"],
        total_price=_money(data["totalPrice"]),
        deposit_amount=_money(data.get("depositAmount")),
        finance_amount=_money(data.get("financeAmount")),
        installment_amount=_money(data.get("installmentAmount")),
        payment_frequency=PaymentFrequency(data["paymentFrequency"]),
        total_installments=int(data["totalInstallments"]),
        grace_period_days=int(data.get("gracePeriodDays") or 0),
        penalty_percentage=_money(data.get("penaltyPercentage")),
        start_date=parse_date(data["startDate"]),
        end_date=parse_date(data["endDate"]),
        status=ContractStatus(data["status"]),
        total_paid=_money(data.get("totalPaid")),
        outstanding_balance=_money(data.get("outstandingBalance")),
        ownership_transferred=bool(data.get("ownershipTransferred", False)),
        customer=_optional(data.get("customer"), parse_customer),
        inventory_item=_optional(data.get("inventoryItem"), parse_inventory_item),
        installments=[parse_installment(i) for i in data.get("installments") or []],
        payments=[parse_payment(p) for p in data.get("payments") or []],
        created_at=parse_optional_datetime(data.get("createdAt")),
        updated_at=parse_optional_datetime(data.get("updatedAt")),
    )


def parse_pagination(data: Optional[Payload], item_count: int) -> Pagination:
    data = data or {}
    return Pagination(
        page=int(data.get("page", 1)),
        limit=int(data.get("limit", item_count)),
        total=int(data.get("total", item_count)),
        total_pages=int(data.get("totalPages", 1)),
    )


def parse_page(data: Payload, key: str, parser: Callable[[Payload], T]) -> PaginatedResponse[T]:
    """
    Parse a list endpoint response.

    The backend names the list after the resource ("contracts", "customers")
    or uses "data"; pagination may be absent on unpaginated lists.
    """
    items: List[Payload] = data.get(key, data.get("data")) or []
    return PaginatedResponse(
        data=[parser(item) for item in items],
        pagination=parse_pagination(data.get("pagination"), len(items)),
    )


def parse_or_raise(parser: Callable[[Payload], T], data: Payload, what: str) -> T:
    """Run a parser, turning shape mismatches into InvalidPayloadError"""
    try:
        return parser(data)
    except (KeyError, ValueError, TypeError, ArithmeticError) as e:
        raise InvalidPayloadError(f"Invalid {what} data from backend: {e}") from e
