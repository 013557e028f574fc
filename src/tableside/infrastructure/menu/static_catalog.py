from __future__ import annotations

from decimal import Decimal

from tableside.application.ports.repositories import MenuRepository
from tableside.domain.common.ids import ProductId
from tableside.domain.menu.entities import MenuItem


def _item(
    item_id: int,
    name: str,
    description: str,
    price: str,
    category: str,
    image: str,
    popular: bool,
    is_drink: bool,
) -> MenuItem:
    return MenuItem(
        item_id=ProductId(item_id),
        name=name,
        description=description,
        price=Decimal(price),
        category=category,
        is_drink=is_drink,
        popular=popular,
        image=image,
    )


MENU: tuple[MenuItem, ...] = (
    _item(
        1,
        "Guinness",
        "Irlanda/Argentina - Alc. Vol 4.5% - Stout Original - 473cc",
        "8.50",
        "Cervezas",
        "https://arcordiezb2c.vteximg.com.br/arquivos/ids/185524/Cerveza-Guiness-Extra-Stout-x-473-Cc-1-21171.jpg",
        True,
        True,
    ),
    _item(
        2,
        "Goose Island",
        "EEUU - Alc. Vol 5% - Hazy IPA - 473cc",
        "9.00",
        "Cervezas",
        "https://masonlineprod.vtexassets.com/arquivos/ids/256210/Cerveza-Goose-Island-Hazy-Ipa-473cc-2-35778.jpg",
        True,
        True,
    ),
    _item(
        3,
        "Coca Cola",
        "1 Litro",
        "4.50",
        "Gaseosas",
        "https://vinotecacampos.com.ar/wp-content/uploads/16501-f1-33.jpg",
        True,
        True,
    ),
    _item(
        4,
        "Mirinda Naranja",
        "500cc",
        "3.50",
        "Gaseosas",
        "https://elnenearg.vtexassets.com/arquivos/ids/155502/MIRINDA-NARANJA-500CC-1-431.jpg",
        False,
        True,
    ),
    _item(
        5,
        "Jameson Original",
        "Irlandés",
        "12.00",
        "Whiskies",
        "https://www.vinosbaco.com/wp-content/uploads/2023/06/64001_JAMESON-216x300.jpg",
        True,
        True,
    ),
    _item(
        6,
        "Grant",
        "Escocés",
        "14.00",
        "Whiskies",
        "https://http2.mlstatic.com/D_NQ_NP_976701-MLA25593335902_052017-O.webp",
        False,
        True,
    ),
    _item(
        7,
        "Jhonnie Walker Red",
        "Jhonnie Walker",
        "15.00",
        "Whiskies",
        "https://acdn-us.mitiendanube.com/stores/002/483/999/products/johnnie-walker-red-lt1-addbdc42a8a5967c9816787441530395-480-0.webp",
        True,
        True,
    ),
    _item(
        8,
        "Jhonnie Walker Black",
        "Jhonnie Walker",
        "18.00",
        "Whiskies",
        "https://acdn-us.mitiendanube.com/stores/004/830/077/products/whisky-johnnie-walker-black-label-700ml-e8de75d9e5cc98d9e717252868986541-1024-1024.webp",
        True,
        True,
    ),
    _item(
        9,
        "Fernet Branca - Medida",
        "Un trago de Fernet puro",
        "5.00",
        "Tragos",
        "https://acdn-us.mitiendanube.com/stores/001/157/846/products/copia-de-diseno-sin-nombre-2022-03-09t092828-1171-9b758b71490a1fc23b16468289376800-1024-1024.webp",
        True,
        True,
    ),
    _item(
        23,
        "Fernet Branca - Preparado Chico",
        "Fernet con cola - vaso chico",
        "8.00",
        "Tragos",
        "https://acdn-us.mitiendanube.com/stores/001/157/846/products/copia-de-diseno-sin-nombre-2022-03-09t092828-1171-9b758b71490a1fc23b16468289376800-1024-1024.webp",
        True,
        True,
    ),
    _item(
        24,
        "Fernet Branca - Preparado Grande",
        "Fernet con cola - vaso grande",
        "12.00",
        "Tragos",
        "https://acdn-us.mitiendanube.com/stores/001/157/846/products/copia-de-diseno-sin-nombre-2022-03-09t092828-1171-9b758b71490a1fc23b16468289376800-1024-1024.webp",
        True,
        True,
    ),
    _item(
        10,
        "Champagne Novecento",
        "Novecento",
        "25.00",
        "Tragos",
        "https://jumboargentina.vtexassets.com/arquivos/ids/183547/Champa%C3%B1a-Novecento-Rosado-Dulce-X-750-Cc-Champa%C3%B1a-Novecento-Rose-Dulce-750-Cc-1-19873.jpg",
        False,
        True,
    ),
    _item(
        11,
        "Champagne Don Perignon",
        "Don Perignon Vintage",
        "120.00",
        "Tragos",
        "https://vinoelsalvador.com/wp-content/uploads/2025/05/DOM-PERIGNON-Blanc-Brut-Vintage-2010-MAGNUM.jpg",
        False,
        True,
    ),
    _item(
        12,
        "Pizza Muzzarella",
        "Clásica pizza con queso muzzarella",
        "15.99",
        "Pizzas",
        "https://resizer.glanacion.com/resizer/v2/-OOYKN3HEDJFQXF3SOECAICFQWQ.jpg",
        True,
        False,
    ),
    _item(
        13,
        "Pizza Napolitana",
        "Muzzarella, tomate y albahaca",
        "16.50",
        "Pizzas",
        "https://rojoynegro.com.ar/pedidos/wp-content/uploads/2020/11/197c0df8-8373-447e-8c33-c44a2526aaed-1588171581145.png",
        True,
        False,
    ),
    _item(
        14,
        "Pizza Roquefort",
        "Queso roquefort y nueces",
        "18.00",
        "Pizzas",
        "https://img-global.cpcdn.com/recipes/d53d5968c0b16951/1200x630cq80/photo.jpg",
        False,
        False,
    ),
    _item(
        15,
        "Ensalada Gourmet",
        "Mezcla de hojas verdes, tomates cherry, croutons",
        "12.50",
        "Ensaladas",
        "https://images.unsplash.com/photo-1546069901-ba9599a7e63c",
        False,
        False,
    ),
    _item(
        16,
        "Ensalada Gourmet con Pollo",
        "Gourmet con Pollo Grillado",
        "15.00",
        "Ensaladas",
        "https://images.unsplash.com/photo-1546069901-d5bfd2cbfb1f",
        True,
        False,
    ),
    _item(
        17,
        "Irish Bot - Picada Chica",
        "Jamón fetas, salame fetas, queso fetas, aceitunas verdes, ají - Para 2 personas",
        "22.00",
        "Picadas",
        "https://encrypted-tbn0.gstatic.com/images?q=tbn:ANd9GcR7v1QYDCDj4XITQ-Az_zgRE_HG_4VW1AfnAw&s",
        True,
        False,
    ),
    _item(
        18,
        "Papas Originales",
        "Con orégano",
        "6.50",
        "Papas",
        "https://images.squarespace-cdn.com/content/v1/644ea2f3486ddf270c1fc2be/f66067e5-5053-4d4e-821e-b60e89703e22/Patatas+crujientes+con+or%C3%A9gano+y+lim%C3%B3n.JPG",
        True,
        False,
    ),
    _item(
        19,
        "Papas a la Crema",
        "Con muzarrella",
        "8.00",
        "Papas",
        "https://encrypted-tbn0.gstatic.com/images?q=tbn:ANd9GcQi7r9AkHBS9-elx5Qvclw998bG4U7M7bGd2g&s",
        True,
        False,
    ),
    _item(
        25,
        "Papas a la Crema",
        "Con cheddar",
        "9.00",
        "Papas",
        "https://truffle-assets.tastemadecontent.net/12851a77-papas-fritas-con-cheddar_l_es_thumbmp4.png",
        True,
        False,
    ),
    _item(
        20,
        "Empanada de Carne",
        "Carne cortada a cuchillo",
        "3.50",
        "Empanadas",
        "https://resizer.glanacion.com/resizer/v2/empanadas-ZEMLUTI4JVFPZIMJM4V3UYB2B4.jpg",
        True,
        False,
    ),
    _item(
        21,
        "Empanada de Pollo",
        "Pollo con verduras",
        "3.50",
        "Empanadas",
        "https://cdn0.recetasgratis.net/es/posts/1/5/1/empanada_tucumana_37151_orig.jpg",
        True,
        False,
    ),
    _item(
        22,
        "Sfijas",
        "Especialidad árabe",
        "4.00",
        "Empanadas",
        "https://img-global.cpcdn.com/recipes/bcc360a45212e9ec/400x400cq80/photo.jpg",
        False,
        False,
    ),
)


class StaticMenuRepository(MenuRepository):
    def __init__(self, items: tuple[MenuItem, ...] | list[MenuItem] = MENU) -> None:
        self._items = list(items)
        self._by_id = {item.item_id: item for item in self._items}

    def list_items(self) -> list[MenuItem]:
        return list(self._items)

    def get_item(self, product_id: ProductId) -> MenuItem | None:
        return self._by_id.get(product_id)
