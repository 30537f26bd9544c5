"""
Demo fixture data for the in-memory backend: 5 clients, 48 domains and
28 hosting accounts. Expiry dates are offsets from the build date so the
dashboard always has a mix of expired, critical, upcoming and healthy services.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from domainhub.utils.helpers import DateUtils, StringUtils

CLIENTS: List[Dict[str, Any]] = [
    {
        'id': 'TC001',
        'full_name': 'Tech Corp',
        'company_name': 'Tech Corporation Ltd',
        'email': 'admin@techcorp.com',
        'phone_number': '+1-555-0123',
        'address': '123 Tech Street, Silicon Valley, CA 94000',
        'country': 'United States',
        'timezone': 'America/Los_Angeles',
        'preferred_contact': 'email',
        'join_date': '2023-01-15',
        'account_status': 'active',
        'notes': 'Priority enterprise client',
        'created_at': '2023-01-15T10:00:00',
        'updated_at': '2024-01-30T15:30:00',
        'created_by': 'admin',
    },
    {
        'id': 'EC002',
        'full_name': 'E-commerce LLC',
        'company_name': 'E-commerce Solutions LLC',
        'email': 'contact@ecommerce.com',
        'phone_number': '+1-555-0456',
        'address': '456 Commerce Ave, New York, NY 10001',
        'country': 'United States',
        'timezone': 'America/New_York',
        'preferred_contact': 'email',
        'join_date': '2022-06-10',
        'account_status': 'active',
        'notes': 'Auto-renewal enabled for all services',
        'created_at': '2022-06-10T08:00:00',
        'updated_at': '2024-01-25T12:00:00',
        'created_by': 'admin',
    },
    {
        'id': 'SC003',
        'full_name': 'Startup Innovation Inc',
        'company_name': 'Startup Innovation Inc',
        'email': 'info@startupinc.com',
        'phone_number': '+1-555-0789',
        'address': '789 Innovation Drive, Austin, TX 78701',
        'country': 'United States',
        'timezone': 'America/Chicago',
        'preferred_contact': 'email',
        'join_date': '2023-03-22',
        'account_status': 'active',
        'notes': 'Fast-growing startup with multiple domains',
        'created_at': '2023-03-22T14:00:00',
        'updated_at': '2024-01-28T10:15:00',
        'created_by': 'admin',
    },
    {
        'id': 'MC004',
        'full_name': 'Marketing Agency Pro',
        'company_name': 'Marketing Agency Pro Ltd',
        'email': 'hello@marketingpro.com',
        'phone_number': '+1-555-0321',
        'address': '321 Marketing Blvd, Miami, FL 33101',
        'country': 'United States',
        'timezone': 'America/New_York',
        'preferred_contact': 'email',
        'join_date': '2022-09-15',
        'account_status': 'active',
        'notes': 'Manages multiple client domains',
        'created_at': '2022-09-15T16:00:00',
        'updated_at': '2024-01-26T14:20:00',
        'created_by': 'admin',
    },
    {
        'id': 'FS005',
        'full_name': 'Financial Services Group',
        'company_name': 'Financial Services Group LLC',
        'email': 'contact@fsgroup.com',
        'phone_number': '+1-555-0654',
        'address': '654 Wall Street, New York, NY 10005',
        'country': 'United States',
        'timezone': 'America/New_York',
        'preferred_contact': 'email',
        'join_date': '2021-11-30',
        'account_status': 'active',
        'notes': 'Enterprise client with security requirements',
        'created_at': '2021-11-30T09:00:00',
        'updated_at': '2024-01-29T11:45:00',
        'created_by': 'admin',
    },
]

# The two clients inserted by the manager when a real backend starts empty
STARTER_CLIENTS = CLIENTS[:2]

# (id, client_id, name, registrar, price, days until expiry)
_DOMAINS = [
    ('DOM001', 'TC001', 'techcorp.com', 'Namecheap', '299.00', 5),
    ('DOM002', 'TC001', 'techcorp.net', 'GoDaddy', '15.99', 57),
    ('DOM003', 'TC001', 'techcorp.org', 'Cloudflare', '12.99', -12),
    ('DOM004', 'TC001', 'techcorp.io', 'Namecheap', '39.99', 118),
    ('DOM005', 'TC001', 'api.techcorp.com', 'Namecheap', '15.99', 26),
    ('DOM006', 'TC001', 'app.techcorp.com', 'Namecheap', '15.99', 73),
    ('DOM007', 'TC001', 'blog.techcorp.com', 'Namecheap', '15.99', 3),
    ('DOM008', 'TC001', 'support.techcorp.com', 'Namecheap', '15.99', 149),
    ('DOM009', 'EC002', 'ecommerce.com', 'GoDaddy', '24.99', 44),
    ('DOM010', 'EC002', 'shop.ecommerce.com', 'GoDaddy', '18.99', 88),
    ('DOM011', 'EC002', 'store.ecommerce.com', 'GoDaddy', '18.99', 15),
    ('DOM012', 'EC002', 'marketplace.com', 'Cloudflare', '35.99', 201),
    ('DOM013', 'EC002', 'checkout.ecommerce.com', 'GoDaddy', '18.99', 61),
    ('DOM014', 'EC002', 'payments.ecommerce.com', 'GoDaddy', '18.99', 230),
    ('DOM015', 'EC002', 'api.ecommerce.com', 'GoDaddy', '18.99', 97),
    ('DOM016', 'EC002', 'admin.ecommerce.com', 'GoDaddy', '18.99', -4),
    ('DOM017', 'SC003', 'startupinc.com', 'Namecheap', '22.99', 9),
    ('DOM018', 'SC003', 'innovation.io', 'Namecheap', '45.99', 132),
    ('DOM019', 'SC003', 'startup.dev', 'Google Domains', '12.99', 176),
    ('DOM020', 'SC003', 'myapp.startupinc.com', 'Namecheap', '15.99', 52),
    ('DOM021', 'SC003', 'beta.startupinc.com', 'Namecheap', '15.99', 28),
    ('DOM022', 'SC003', 'demo.startupinc.com', 'Namecheap', '15.99', 67),
    ('DOM023', 'SC003', 'staging.startupinc.com', 'Namecheap', '15.99', 154),
    ('DOM024', 'SC003', 'docs.startupinc.com', 'Namecheap', '15.99', 289),
    ('DOM025', 'MC004', 'marketingpro.com', 'GoDaddy', '28.99', 35),
    ('DOM026', 'MC004', 'campaigns.marketingpro.com', 'GoDaddy', '19.99', 187),
    ('DOM027', 'MC004', 'analytics.marketingpro.com', 'GoDaddy', '19.99', 21),
    ('DOM028', 'MC004', 'crm.marketingpro.com', 'GoDaddy', '19.99', 143),
    ('DOM029', 'MC004', 'landing.marketingpro.com', 'GoDaddy', '19.99', 79),
    ('DOM030', 'MC004', 'forms.marketingpro.com', 'GoDaddy', '19.99', 312),
    ('DOM031', 'MC004', 'email.marketingpro.com', 'GoDaddy', '19.99', 6),
    ('DOM032', 'MC004', 'social.marketingpro.com', 'GoDaddy', '19.99', 110),
    ('DOM033', 'FS005', 'fsgroup.com', 'Cloudflare', '32.99', 240),
    ('DOM034', 'FS005', 'portal.fsgroup.com', 'Cloudflare', '25.99', 48),
    ('DOM035', 'FS005', 'secure.fsgroup.com', 'Cloudflare', '25.99', 125),
    ('DOM036', 'FS005', 'api.fsgroup.com', 'Cloudflare', '25.99', -30),
    ('DOM037', 'FS005', 'trading.fsgroup.com', 'Cloudflare', '25.99', 265),
    ('DOM038', 'FS005', 'reports.fsgroup.com', 'Cloudflare', '25.99', 92),
    ('DOM039', 'FS005', 'compliance.fsgroup.com', 'Cloudflare', '25.99', 163),
    ('DOM040', 'FS005', 'kyc.fsgroup.com', 'Cloudflare', '25.99', 13),
    ('DOM041', 'TC001', 'dev.techcorp.com', 'Namecheap', '15.99', 83),
    ('DOM042', 'EC002', 'mobile.ecommerce.com', 'GoDaddy', '18.99', 104),
    ('DOM043', 'SC003', 'test.startupinc.com', 'Namecheap', '15.99', 198),
    ('DOM044', 'MC004', 'clients.marketingpro.com', 'GoDaddy', '19.99', 2),
    ('DOM045', 'FS005', 'backup.fsgroup.com', 'Cloudflare', '25.99', 137),
    ('DOM046', 'TC001', 'cdn.techcorp.com', 'Namecheap', '15.99', 350),
    ('DOM047', 'EC002', 'cdn.ecommerce.com', 'GoDaddy', '18.99', 39),
    ('DOM048', 'SC003', 'cdn.startupinc.com', 'Namecheap', '15.99', 18),
]

# (id, client_id, associated_domain_id, package_name, hosting_type, provider, price)
_HOSTING = [
    ('HOST001', 'TC001', 'DOM001', 'Business Pro', 'vps', 'HostGator', '599.00'),
    ('HOST002', 'TC001', 'DOM002', 'Enterprise Cloud', 'cloud', 'AWS', '899.00'),
    ('HOST003', 'TC001', 'DOM003', 'Standard VPS', 'vps', 'DigitalOcean', '299.00'),
    ('HOST004', 'TC001', 'DOM004', 'Premium Shared', 'shared', 'SiteGround', '199.00'),
    ('HOST005', 'TC001', 'DOM005', 'API Hosting', 'cloud', 'AWS', '449.00'),
    ('HOST006', 'TC001', 'DOM006', 'App Hosting', 'cloud', 'AWS', '549.00'),
    ('HOST007', 'TC001', 'DOM007', 'Blog Hosting', 'shared', 'Bluehost', '99.00'),
    ('HOST008', 'TC001', 'DOM008', 'Support Portal', 'vps', 'HostGator', '399.00'),
    ('HOST009', 'EC002', 'DOM009', 'E-commerce Pro', 'dedicated', 'HostGator', '1299.00'),
    ('HOST010', 'EC002', 'DOM010', 'Shop Hosting', 'vps', 'SiteGround', '699.00'),
    ('HOST011', 'EC002', 'DOM011', 'Store Backend', 'cloud', 'AWS', '799.00'),
    ('HOST012', 'EC002', 'DOM012', 'Marketplace Cloud', 'cloud', 'AWS', '999.00'),
    ('HOST013', 'EC002', 'DOM013', 'Checkout Service', 'cloud', 'AWS', '649.00'),
    ('HOST014', 'EC002', 'DOM014', 'Payment Gateway', 'dedicated', 'HostGator', '1499.00'),
    ('HOST015', 'SC003', 'DOM017', 'Startup Basic', 'shared', 'Bluehost', '149.00'),
    ('HOST016', 'SC003', 'DOM018', 'Innovation Cloud', 'cloud', 'DigitalOcean', '399.00'),
    ('HOST017', 'SC003', 'DOM019', 'Dev Environment', 'vps', 'DigitalOcean', '249.00'),
    ('HOST018', 'SC003', 'DOM020', 'App Server', 'vps', 'DigitalOcean', '349.00'),
    ('HOST019', 'SC003', 'DOM021', 'Beta Testing', 'shared', 'Bluehost', '99.00'),
    ('HOST020', 'MC004', 'DOM025', 'Agency Premium', 'vps', 'SiteGround', '599.00'),
    ('HOST021', 'MC004', 'DOM026', 'Campaign Server', 'vps', 'SiteGround', '449.00'),
    ('HOST022', 'MC004', 'DOM027', 'Analytics Pro', 'cloud', 'AWS', '699.00'),
    ('HOST023', 'MC004', 'DOM028', 'CRM Hosting', 'vps', 'SiteGround', '549.00'),
    ('HOST024', 'MC004', 'DOM029', 'Landing Pages', 'shared', 'WP Engine', '299.00'),
    ('HOST025', 'FS005', 'DOM033', 'Enterprise Security', 'dedicated', 'AWS', '1999.00'),
    ('HOST026', 'FS005', 'DOM034', 'Portal Server', 'dedicated', 'AWS', '1699.00'),
    ('HOST027', 'FS005', 'DOM035', 'Secure Cloud', 'cloud', 'AWS', '1299.00'),
    ('HOST028', 'FS005', 'DOM036', 'API Gateway', 'cloud', 'AWS', '999.00'),
]

_NAMESERVERS = {
    'Namecheap': ('ns1.namecheap.com', 'ns2.namecheap.com'),
    'GoDaddy': ('ns1.godaddy.com', 'ns2.godaddy.com'),
    'Cloudflare': ('ns1.cloudflare.com', 'ns2.cloudflare.com'),
}

_CONTROL_PANELS = {
    'AWS': 'https://console.aws.amazon.com',
    'HostGator': 'https://cpanel.hostgator.com',
    'SiteGround': 'https://sitetools.siteground.com',
    'DigitalOcean': 'https://cloud.digitalocean.com',
    'Bluehost': 'https://my.bluehost.com/hosting/cpanel',
}

_STORAGE = {'shared': '50GB', 'vps': '100GB', 'cloud': '250GB', 'dedicated': '500GB'}
_LOCATIONS = ['Singapore', 'USA East', 'USA West', 'London', 'Frankfurt']
_BACKUP_STATUSES = ['success', 'success', 'success', 'failed']


def _status_for(days_left: int) -> str:
    if days_left <= 0:
        return 'expired'
    if days_left <= 30:
        return 'expiring'
    return 'active'


def _timestamp(day: date) -> str:
    return f"{day.isoformat()}T09:00:00"


def build_clients() -> List[Dict[str, Any]]:
    return [dict(client) for client in CLIENTS]


def build_domains(today: Optional[date] = None) -> List[Dict[str, Any]]:
    today = today or DateUtils.today()
    domains = []
    for index, (domain_id, client_id, name, registrar, price, offset) in enumerate(_DOMAINS):
        expiration = DateUtils.add_days(today, offset)
        registration = DateUtils.add_years(expiration, -1)
        primary_ns, secondary_ns = _NAMESERVERS.get(
            registrar, ('ns1.google.com', 'ns2.google.com'))
        domains.append({
            'id': domain_id,
            'client_id': client_id,
            'name': name,
            'registrar': registrar,
            'registration_date': registration.isoformat(),
            'expiration_date': expiration.isoformat(),
            'status': _status_for(offset),
            'primary_ns': primary_ns,
            'secondary_ns': secondary_ns,
            'price': Decimal(price),
            'currency': 'USD',
            'payment_status': 'unpaid' if index % 3 == 0 else 'paid',
            'invoice_number': StringUtils.generate_invoice_number('D', index + 1, registration.year),
            'notes': 'Priority renewal required' if index == 0 else '',
            'auto_renewal': index % 2 == 0,
            'created_at': _timestamp(registration),
            'updated_at': _timestamp(DateUtils.add_days(today, -(index % 30))),
            'created_by': 'admin',
        })
    return domains


def build_hosting(today: Optional[date] = None) -> List[Dict[str, Any]]:
    today = today or DateUtils.today()
    offsets = {row[0]: row[5] for row in _DOMAINS}
    hosting = []
    for index, (host_id, client_id, domain_id, package, hosting_type,
                provider, price) in enumerate(_HOSTING):
        offset = offsets[domain_id]
        expiration = DateUtils.add_days(today, offset)
        purchase = DateUtils.add_years(expiration, -1)
        hosting.append({
            'id': host_id,
            'client_id': client_id,
            'associated_domain_id': domain_id,
            'package_name': package,
            'hosting_type': hosting_type,
            'provider_name': provider,
            'account_username': f"user_{host_id.lower()}",
            'account_password': 'encrypted_password_here',
            'control_panel_url': _CONTROL_PANELS.get(provider, 'https://my.wpengine.com'),
            'storage_space': _STORAGE[hosting_type],
            'bandwidth_limit': '1TB' if hosting_type == 'shared' else 'Unlimited',
            'ip_address': f"192.168.{index // 10 + 1}.{index % 10 + 100}",
            'server_location': _LOCATIONS[index % len(_LOCATIONS)],
            'purchase_date': purchase.isoformat(),
            'expiration_date': expiration.isoformat(),
            'status': _status_for(offset),
            'price': Decimal(price),
            'currency': 'USD',
            'payment_status': 'unpaid' if index % 5 == 0 else 'paid',
            'invoice_number': StringUtils.generate_invoice_number('H', index + 1, purchase.year),
            'usage_percent': 10 + (index * 37) % 81,
            'last_backup': DateUtils.add_days(today, -(index % 7)).isoformat(),
            'backup_status': _BACKUP_STATUSES[index % len(_BACKUP_STATUSES)],
            'notes': 'Priority renewal required' if index == 0 else '',
            'auto_renewal': index % 2 == 1,
            'support_contact': f"support@{provider.lower().replace(' ', '')}.com",
            'created_at': _timestamp(purchase),
            'updated_at': _timestamp(DateUtils.add_days(today, -(index % 30))),
            'created_by': 'admin',
        })
    return hosting
