"""
Use Cases

Organized by area:
- auth/: sign-up, authentication, role and password management
- business/: the business (tenant) profile and VAT settings
- cleaners/: roster management and cleaner invitations
- clients/, jobs/, invoices/: day-to-day operations of a business
- subscriptions/, payments/: plans, usage limits and checkout
- dashboard/, admin/: summary statistics
- reports/: period and client reports, CSV export
- sweeps/: background reminders and recurring job renewal
- upload/: image uploads
"""
