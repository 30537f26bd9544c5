"""
Data Models for DomainHub
Dataclasses representing clients, their services and derived records
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from typing import Optional, Dict, Any
from enum import Enum

# Enums for database constraints
class AccountStatus(Enum):
    ACTIVE = 'active'
    INACTIVE = 'inactive'
    SUSPENDED = 'suspended'

class ContactMethod(Enum):
    EMAIL = 'email'
    SMS = 'sms'
    WHATSAPP = 'whatsapp'
    PHONE = 'phone'

class ServiceStatus(Enum):
    ACTIVE = 'active'
    EXPIRING = 'expiring'
    EXPIRED = 'expired'
    PENDING = 'pending'
    SUSPENDED = 'suspended'  # hosting only

class Currency(Enum):
    USD = 'USD'
    BDT = 'BDT'

class PaymentStatus(Enum):
    PAID = 'paid'
    UNPAID = 'unpaid'
    PARTIALLY_PAID = 'partially_paid'
    REFUNDED = 'refunded'

class HostingType(Enum):
    SHARED = 'shared'
    VPS = 'vps'
    DEDICATED = 'dedicated'
    CLOUD = 'cloud'

class BackupStatus(Enum):
    SUCCESS = 'success'
    FAILED = 'failed'
    PENDING = 'pending'

class ServiceType(Enum):
    DOMAIN = 'domain'
    HOSTING = 'hosting'
    OTHER = 'other'

class PaymentMethod(Enum):
    CASH = 'cash'
    BANK_TRANSFER = 'bank_transfer'
    CARD = 'card'
    BKASH = 'bkash'
    NAGAD = 'nagad'
    PAYPAL = 'paypal'
    STRIPE = 'stripe'

class NotificationType(Enum):
    EXPIRY_REMINDER = 'expiry_reminder'
    PAYMENT_DUE = 'payment_due'
    OVERDUE_PAYMENT = 'overdue_payment'
    RENEWAL_SUCCESS = 'renewal_success'
    SYSTEM_ALERT = 'system_alert'

class NotificationChannel(Enum):
    EMAIL = 'email'
    SMS = 'sms'
    WHATSAPP = 'whatsapp'
    SYSTEM = 'system'

class NotificationPriority(Enum):
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'
    CRITICAL = 'critical'

class SortOrder(Enum):
    ASC = 'asc'
    DESC = 'desc'

class BackupType(Enum):
    FULL = 'full'
    INCREMENTAL = 'incremental'

class ExportFormat(Enum):
    JSON = 'json'
    CSV = 'csv'
    SQL = 'sql'

@dataclass(frozen=True)
class ServiceRef:
    """Reference from a payment to exactly one billed service"""
    service_type: ServiceType
    service_id: str

    @classmethod
    def domain(cls, service_id: str) -> 'ServiceRef':
        return cls(ServiceType.DOMAIN, service_id)

    @classmethod
    def hosting(cls, service_id: str) -> 'ServiceRef':
        return cls(ServiceType.HOSTING, service_id)

    @classmethod
    def other(cls, service_id: str) -> 'ServiceRef':
        return cls(ServiceType.OTHER, service_id)

@dataclass
class Client:
    """Client entity, the owner of every service and payment"""
    id: Optional[str] = None
    full_name: str = ""
    company_name: Optional[str] = None
    email: str = ""
    phone_number: Optional[str] = None
    address: Optional[str] = None
    country: str = "United States"
    timezone: str = "UTC"
    preferred_contact: ContactMethod = ContactMethod.EMAIL
    join_date: Optional[date] = None
    account_status: AccountStatus = AccountStatus.ACTIVE
    notes: Optional[str] = None

    # Aggregated from child records, never stored
    total_domains: Optional[int] = None
    total_hosting: Optional[int] = None
    total_services: Optional[int] = None
    upcoming_renewals: Optional[int] = None
    total_spent: Optional[Decimal] = None
    last_payment: Optional[date] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    created_by: str = "admin"

@dataclass
class Domain:
    """Domain registration entity"""
    id: Optional[str] = None
    client_id: str = ""
    name: str = ""
    registrar: str = ""
    registration_date: Optional[date] = None
    expiration_date: Optional[date] = None
    status: ServiceStatus = ServiceStatus.ACTIVE
    primary_ns: Optional[str] = None
    secondary_ns: Optional[str] = None
    price: Decimal = Decimal('0.00')
    currency: Currency = Currency.USD
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    invoice_number: Optional[str] = None
    notes: Optional[str] = None
    auto_renewal: bool = False

    days_until_expiry: Optional[int] = None

    client_name: Optional[str] = None
    client_email: Optional[str] = None
    client_company: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    created_by: str = "admin"

@dataclass
class Hosting:
    """Hosting account entity"""
    id: Optional[str] = None
    client_id: str = ""
    associated_domain_id: Optional[str] = None
    package_name: str = ""
    hosting_type: HostingType = HostingType.SHARED
    provider_name: str = ""
    account_username: Optional[str] = None
    account_password: Optional[str] = None
    control_panel_url: Optional[str] = None
    storage_space: Optional[str] = None
    bandwidth_limit: Optional[str] = None
    ip_address: Optional[str] = None
    server_location: Optional[str] = None
    purchase_date: Optional[date] = None
    expiration_date: Optional[date] = None
    status: ServiceStatus = ServiceStatus.ACTIVE
    price: Decimal = Decimal('0.00')
    currency: Currency = Currency.USD
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    invoice_number: Optional[str] = None
    usage_percent: int = 0
    last_backup: Optional[date] = None
    backup_status: Optional[BackupStatus] = None
    notes: Optional[str] = None
    auto_renewal: bool = False
    support_contact: Optional[str] = None

    days_until_expiry: Optional[int] = None

    client_name: Optional[str] = None
    client_email: Optional[str] = None
    client_company: Optional[str] = None
    domain_name: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    created_by: str = "admin"

@dataclass
class Payment:
    """Payment / invoice entity"""
    id: Optional[str] = None
    client_id: str = ""
    service: Optional[ServiceRef] = None
    amount: Decimal = Decimal('0.00')
    currency: Currency = Currency.USD
    exchange_rate: Optional[Decimal] = None
    payment_date: Optional[date] = None
    due_date: Optional[date] = None
    payment_method: PaymentMethod = PaymentMethod.CASH
    invoice_number: Optional[str] = None
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    notes: Optional[str] = None

    converted_amount: Optional[Decimal] = None
    is_overdue: bool = False
    days_overdue: int = 0

    client_name: Optional[str] = None
    client_email: Optional[str] = None
    service_name: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    created_by: str = "admin"

    @property
    def service_id(self) -> Optional[str]:
        return self.service.service_id if self.service else None

    @property
    def service_type(self) -> Optional[ServiceType]:
        return self.service.service_type if self.service else None

@dataclass
class ExpiryEvent:
    """Calendar entry derived from a domain or hosting expiry"""
    id: str = ""
    client_id: str = ""
    service: Optional[ServiceRef] = None
    service_name: str = ""
    expiry_date: Optional[date] = None
    status: ServiceStatus = ServiceStatus.ACTIVE
    renewal_price: Decimal = Decimal('0.00')
    currency: Currency = Currency.USD
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    days_remaining: int = 0
    client_name: Optional[str] = None

@dataclass
class Notification:
    """Alert derived from expiring services or overdue payments"""
    id: str = ""
    client_id: str = ""
    type: NotificationType = NotificationType.SYSTEM_ALERT
    title: str = ""
    message: str = ""
    channel: NotificationChannel = NotificationChannel.EMAIL
    priority: NotificationPriority = NotificationPriority.MEDIUM
    service_id: Optional[str] = None
    payment_id: Optional[str] = None
    status: str = "pending"
    metadata: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None

@dataclass
class BackupLog:
    """Backup log entry"""
    id: Optional[int] = None
    backup_type: BackupType = BackupType.FULL
    file_path: str = ""
    file_size: Optional[int] = None
    status: str = "in_progress"  # in_progress, success, failed
    error_message: Optional[str] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_by: Optional[str] = None

@dataclass
class DashboardStats:
    """Headline numbers for the dashboard"""
    total_clients: int = 0
    total_domains: int = 0
    total_hosting: int = 0
    upcoming_renewals: int = 0
    unpaid_invoices: int = 0
    total_revenue_bdt: Decimal = Decimal('0.00')
    total_revenue_usd: Decimal = Decimal('0.00')
    expired_services: int = 0
    critical_services: int = 0  # expiring within 7 days
    warning_services: int = 0   # expiring within 8-30 days
    active_services: int = 0

@dataclass
class QueryOptions:
    """Filtering, sorting and pagination accepted by every get_all"""
    filters: Dict[str, Any] = field(default_factory=dict)
    sort_by: Optional[str] = None
    sort_order: SortOrder = SortOrder.ASC
    page: Optional[int] = None
    limit: Optional[int] = None
