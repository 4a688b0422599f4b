"""
Management command to fetch orders and print dashboard totals and listing.
"""
import time

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from orders.domain.errors import OrderDeskError
from orders.domain.order import OrderStatus
from orders.domain.query import ALL, OrderQuery, empty_state_message
from orders.infra.gateway import OrdersGateway
from orders.services import OrderService


class Command(BaseCommand):
    help = 'Fetch orders from the order service and print stats and listing'

    def add_arguments(self, parser):
        parser.add_argument(
            '--token',
            default=None,
            help='Bearer token for the order service (defaults to ORDERS_API_TOKEN)',
        )
        parser.add_argument('--search', default='', help='Search term')
        parser.add_argument('--status', default=ALL, help='Status filter')
        parser.add_argument('--payment', default=ALL, help='Payment status filter')
        parser.add_argument('--sort-by', default='date', help='date, amount or status')
        parser.add_argument('--order', default='desc', help='asc or desc')
        parser.add_argument(
            '--loop',
            action='store_true',
            help='Keep refreshing until interrupted',
        )
        parser.add_argument(
            '--interval',
            type=int,
            default=30,
            help='Interval between refreshes in seconds',
        )

    def handle(self, *args, **options):
        try:
            query = OrderQuery(
                term=options['search'],
                status=options['status'],
                payment_status=options['payment'],
                sort_by=options['sort_by'],
                sort_order=options['order'],
            )
            gateway = OrdersGateway.from_settings(
                token=options['token'] or settings.ORDERS_API_TOKEN
            )
        except OrderDeskError as e:
            raise CommandError(e.message)

        service = OrderService(gateway=gateway)

        if options['loop']:
            self.stdout.write(f"Starting order sync in loop mode (interval: {options['interval']}s)")
            while True:
                try:
                    self._sync(service, query)
                    time.sleep(options['interval'])
                except KeyboardInterrupt:
                    self.stdout.write(self.style.WARNING('Stopped by user'))
                    break
        else:
            self._sync(service, query)

    def _sync(self, service, query):
        try:
            service.refresh()
        except OrderDeskError as e:
            raise CommandError(e.message)

        stats = service.stats()
        self.stdout.write(self.style.SUCCESS(f'Loaded {stats.total_count} orders'))
        self.stdout.write(
            f"Pending: {stats.count_for(OrderStatus.PENDING)}  "
            f"Delivered: {stats.count_for(OrderStatus.DELIVERED)}  "
            f"Revenue: ${stats.formatted_revenue}"
        )

        orders = service.list_orders(query)
        if not orders:
            self.stdout.write(empty_state_message(query))
            return

        for order in orders:
            self.stdout.write(
                f"{order.display_id:<10} {order.display_name:<20} "
                f"{order.date:%Y-%m-%d} {order.items_count:>3} items "
                f"${order.amount:>10.2f} {order.status_label:<10} {order.payment_status_label}"
            )
