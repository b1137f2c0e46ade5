"""
Django management command to create test data for development and testing.

Creates:
- A superuser (admin/admin)
- A test team with settings and an RSA key pair
- An API key for the team
- A test customer and product
- Optionally, a test license
"""

from asgiref.sync import async_to_sync
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from core.security.crypto import generate_key_pair
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.dto.license_dto import IssuedLicenseDTO
from licenses.application.handlers.issue_license_handler import IssueLicenseHandler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from teams.infrastructure.models import ApiKey, Customer, KeyPair, Product, Team, TeamSettings
from teams.infrastructure.repositories.django_team_repository import DjangoTeamRepository

User = get_user_model()


class Command(BaseCommand):
    """Command to create test data."""

    help = "Create test data (superuser, team, API key, customer, product, license)"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--skip-superuser",
            action="store_true",
            help="Skip creating superuser",
        )
        parser.add_argument(
            "--skip-license",
            action="store_true",
            help="Skip creating test license",
        )
        parser.add_argument(
            "--team-name",
            type=str,
            default="Test Team",
            help="Team name (default: Test Team)",
        )
        parser.add_argument(
            "--product-name",
            type=str,
            default="Test Product",
            help="Product name (default: Test Product)",
        )
        parser.add_argument(
            "--customer-email",
            type=str,
            default="test@example.com",
            help="Customer email (default: test@example.com)",
        )
        parser.add_argument(
            "--seats",
            type=int,
            default=5,
            help="Seat limit of the test license (default: 5)",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        with transaction.atomic():
            if not options["skip_superuser"]:
                self.create_superuser()

            team = self.create_team(options["team_name"])
            api_key = self.create_api_key(team)
            customer = self.create_customer(team, options["customer_email"])
            product = self.create_product(team, options["product_name"])

        issued = None
        if not options["skip_license"]:
            issued = self.create_test_license(team, options["seats"])

        self.print_summary(team, api_key, customer, product, issued)

    def create_superuser(self):
        """Create a superuser if it doesn't exist."""
        username = "admin"
        email = "admin@example.com"
        password = "admin"

        if User.objects.filter(username=username).exists():
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING(f"Superuser '{username}' already exists"))
            return

        User.objects.create_superuser(username=username, email=email, password=password)
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Created superuser: {username} / {password}"))

    def create_team(self, name: str) -> Team:
        """Create a test team with default settings and a key pair."""
        # pylint: disable=no-member
        existing = Team.objects.filter(name=name, deleted_at__isnull=True).first()
        if existing:
            self.stdout.write(self.style.WARNING(f"Team '{name}' already exists ({existing.id})"))
            return existing

        team = Team.objects.create(name=name)
        TeamSettings.objects.create(team=team)
        public_key, private_key = generate_key_pair()
        KeyPair.objects.create(team=team, public_key=public_key, private_key=private_key)

        self.stdout.write(self.style.SUCCESS(f"Created team: {team.name} ({team.id})"))
        return team

    def create_api_key(self, team: Team) -> ApiKey:
        """Create an API key for the team."""
        api_key = ApiKey(team=team, name="test-data")
        api_key.save()
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS("Created API key"))
        return api_key

    def create_customer(self, team: Team, email: str) -> Customer:
        """Create a test customer."""
        # pylint: disable=no-member
        customer, created = Customer.objects.get_or_create(
            team=team, email=email, defaults={"full_name": "Test Customer"}
        )
        if created:
            self.stdout.write(self.style.SUCCESS(f"Created customer: {email}"))
        return customer

    def create_product(self, team: Team, name: str) -> Product:
        """Create a test product."""
        # pylint: disable=no-member
        product, created = Product.objects.get_or_create(team=team, name=name)
        if created:
            self.stdout.write(self.style.SUCCESS(f"Created product: {name}"))
        return product

    def create_test_license(self, team: Team, seats: int) -> IssuedLicenseDTO:
        """Issue a test license through the issuance handler."""
        handler = IssueLicenseHandler(
            team_repository=DjangoTeamRepository(),
            license_repository=DjangoLicenseRepository(),
        )
        issued = async_to_sync(handler.handle)(IssueLicenseCommand(team_id=team.id, seats=seats))
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Issued license {issued.id}"))
        return issued

    def print_summary(
        self,
        team: Team,
        api_key: ApiKey,
        customer: Customer,
        product: Product,
        issued: IssuedLicenseDTO = None,
    ):
        """Print summary of created test data."""
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS("\n" + "=" * 60))
        self.stdout.write(self.style.SUCCESS("Test Data Summary"))
        self.stdout.write(self.style.SUCCESS("=" * 60))

        self.stdout.write("\nSuperuser:")
        self.stdout.write("   Username: admin")
        self.stdout.write("   Password: admin")
        self.stdout.write("   URL: http://localhost:8000/admin/")

        self.stdout.write("\nTeam:")
        self.stdout.write(f"   Name: {team.name}")
        self.stdout.write(f"   ID: {team.id}")

        raw_key = getattr(api_key, "_raw_key", None)
        self.stdout.write("\nAPI Key:")
        self.stdout.write(f"   {raw_key}")
        self.stdout.write(self.style.WARNING("   Save this - it cannot be retrieved later!"))

        self.stdout.write(f"\nCustomer: {customer.email} ({customer.id})")
        self.stdout.write(f"Product: {product.name} ({product.id})")

        if issued:
            self.stdout.write("\nLicense:")
            self.stdout.write(f"   Key: {issued.license_key}")
            self.stdout.write(f"   Seats: {issued.seats}")

            self.stdout.write("\nExample heartbeat:")
            self.stdout.write(
                f"   curl -X POST http://localhost:8000/api/v1/license/{team.id}/heartbeat \\"
            )
            self.stdout.write('     -H "Content-Type: application/json" \\')
            self.stdout.write(
                f'     -d \'{{"licenseKey": "{issued.license_key}", '
                '"clientIdentifier": "example-device-0001"}\''
            )

        self.stdout.write(self.style.SUCCESS("\n" + "=" * 60 + "\n"))
