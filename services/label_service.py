"""
Serviço para renderização de etiquetas imprimíveis (HTML via Jinja2):
- etiquetas de slots vazios com o código de localização
- etiqueta do pallet com o LPN
"""
import os
from datetime import date
from jinja2 import Environment, FileSystemLoader, select_autoescape
from dotenv import load_dotenv
from models.rack import Rack
from models.inventory_item import InventoryItem
from models.slot import SlotStatus
from services.inventory_service import InventoryService
from services.snapshots import InventorySnapshot
from services.topology_service import TopologyService

load_dotenv()

TEMPLATES_DIR = os.getenv(
    "TEMPLATES_DIR",
    os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "templates")
)
QR_URL = "https://api.qrserver.com/v1/create-qr-code/?size=300x300&data={data}"

template_env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html"])
)
template_env.filters["qr_url"] = lambda data: QR_URL.format(data=data)


class LabelService:
    """Renderiza etiquetas de slots e pallets"""

    @staticmethod
    def render(template_name: str, context: dict) -> str:
        template = template_env.get_template(template_name)
        return template.render(**context)

    @staticmethod
    def slot_labels(rack: Rack, inventory: InventorySnapshot) -> str:
        """Uma etiqueta por slot vazio e desbloqueado do rack"""
        slots = [
            slot for slot in TopologyService.rack_layout(rack, inventory)
            if slot["status"] == SlotStatus.EMPTY
        ]
        return LabelService.render("labels/slot_labels.html", {
            "rack": rack,
            "zone": rack.zone,
            "slots": slots
        })

    @staticmethod
    def pallet_label(item: InventoryItem, today: date = None) -> str:
        return LabelService.render("labels/pallet_label.html", {
            "item": InventoryService.to_response(item, today)
        })
