# agrichain/services/registry.py
from dataclasses import dataclass
from typing import Optional

from agrichain.data.collections import CollectionStore
from agrichain.repos.farmer_repo import FarmerRepo
from agrichain.repos.product_repo import ProductRepo
from agrichain.repos.scheme_repo import SchemeRepo
from agrichain.repos.trace_repo import TraceRepo
from agrichain.repos.transaction_repo import TransactionRepo
from agrichain.services.admin_service import AdminService
from agrichain.services.cart_service import CartService
from agrichain.services.claim_service import ClaimService
from agrichain.services.listing_service import ListingService
from agrichain.services.notification_service import NotificationService
from agrichain.services.order_service import OrderService
from agrichain.services.search_service import SearchService
from agrichain.services.session_service import SessionService
from agrichain.services.stats_service import StatsService
from agrichain.utils.network import NetworkSimulator


@dataclass
class Services:
    store: CollectionStore
    network: NetworkSimulator
    products: ProductRepo
    farmers: FarmerRepo
    transactions: TransactionRepo
    schemes: SchemeRepo
    traces: TraceRepo
    stats: StatsService
    search: SearchService
    admin: AdminService
    orders: OrderService
    claims: ClaimService
    listings: ListingService
    session: SessionService

    def cart(self, session_id: str = "default") -> CartService:
        return CartService(self.store, session_id)


def build_services(
    store: CollectionStore,
    network: Optional[NetworkSimulator] = None,
    notifications: Optional[NotificationService] = None,
) -> Services:
    """Jedno miejsce gdzie uchwyt magazynu trafia do wszystkich repozytoriow."""
    network = network or NetworkSimulator()
    notifications = notifications or NotificationService()

    products = ProductRepo(store, network)
    farmers = FarmerRepo(store, network)
    transactions = TransactionRepo(store, network)
    schemes = SchemeRepo(store, network)
    traces = TraceRepo(store, network)

    return Services(
        store=store,
        network=network,
        products=products,
        farmers=farmers,
        transactions=transactions,
        schemes=schemes,
        traces=traces,
        stats=StatsService(products, transactions, network),
        search=SearchService(products, farmers, schemes, network),
        admin=AdminService(store, network),
        orders=OrderService(store, notifications),
        claims=ClaimService(store, notifications),
        listings=ListingService(store, products, traces),
        session=SessionService(store),
    )
