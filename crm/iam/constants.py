ROLE_SYSTEM_ADMIN = "system_admin"
ROLE_ADMIN = "admin"
ROLE_SALES_MANAGER = "sales_manager"
ROLE_SALES_REP = "sales_rep"
ROLE_MARKETING = "marketing"

ROLE_CHOICES = [
    (ROLE_SYSTEM_ADMIN, "System admin"),
    (ROLE_ADMIN, "Admin"),
    (ROLE_SALES_MANAGER, "Sales manager"),
    (ROLE_SALES_REP, "Sales rep"),
    (ROLE_MARKETING, "Marketing"),
]

LEADS_VIEW = "leads.view"
LEADS_CREATE = "leads.create"
LEADS_EDIT = "leads.edit"
LEADS_DELETE = "leads.delete"
LEADS_QUALIFY = "leads.qualify"

CONTACTS_VIEW = "contacts.view"
CONTACTS_CREATE = "contacts.create"
CONTACTS_EDIT = "contacts.edit"
CONTACTS_DELETE = "contacts.delete"

ACCOUNTS_VIEW = "accounts.view"
ACCOUNTS_CREATE = "accounts.create"
ACCOUNTS_EDIT = "accounts.edit"
ACCOUNTS_DELETE = "accounts.delete"

CAMPAIGNS_VIEW = "campaigns.view"
CAMPAIGNS_CREATE = "campaigns.create"
CAMPAIGNS_EDIT = "campaigns.edit"
CAMPAIGNS_DELETE = "campaigns.delete"

SUBDEALERS_VIEW = "subdealers.view"
DASHBOARD_VIEW = "dashboard.view"
USERS_MANAGE = "users.manage"
AUDIT_VIEW = "audit.view"

ALL_PERMISSIONS = frozenset({
    LEADS_VIEW, LEADS_CREATE, LEADS_EDIT, LEADS_DELETE, LEADS_QUALIFY,
    CONTACTS_VIEW, CONTACTS_CREATE, CONTACTS_EDIT, CONTACTS_DELETE,
    ACCOUNTS_VIEW, ACCOUNTS_CREATE, ACCOUNTS_EDIT, ACCOUNTS_DELETE,
    CAMPAIGNS_VIEW, CAMPAIGNS_CREATE, CAMPAIGNS_EDIT, CAMPAIGNS_DELETE,
    SUBDEALERS_VIEW, DASHBOARD_VIEW, USERS_MANAGE, AUDIT_VIEW,
})

# Seeded on assign_role(); stored per user and editable afterwards.
ROLE_DEFAULT_PERMISSIONS = {
    ROLE_SYSTEM_ADMIN: sorted(ALL_PERMISSIONS),
    ROLE_ADMIN: sorted(ALL_PERMISSIONS - {USERS_MANAGE}),
    ROLE_SALES_MANAGER: sorted({
        LEADS_VIEW, LEADS_CREATE, LEADS_EDIT, LEADS_DELETE, LEADS_QUALIFY,
        CONTACTS_VIEW, CONTACTS_CREATE, CONTACTS_EDIT, CONTACTS_DELETE,
        ACCOUNTS_VIEW, ACCOUNTS_CREATE, ACCOUNTS_EDIT,
        CAMPAIGNS_VIEW, SUBDEALERS_VIEW, DASHBOARD_VIEW,
    }),
    ROLE_SALES_REP: sorted({
        LEADS_VIEW, LEADS_CREATE, LEADS_EDIT, LEADS_QUALIFY,
        CONTACTS_VIEW, CONTACTS_CREATE, CONTACTS_EDIT,
        ACCOUNTS_VIEW, DASHBOARD_VIEW,
    }),
    ROLE_MARKETING: sorted({
        LEADS_VIEW, LEADS_CREATE,
        CAMPAIGNS_VIEW, CAMPAIGNS_CREATE, CAMPAIGNS_EDIT, CAMPAIGNS_DELETE,
        CONTACTS_VIEW, DASHBOARD_VIEW,
    }),
}
