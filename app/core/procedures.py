"""
Funciones almacenadas de PostgreSQL usadas por el backend de procedimientos.

Tienen la misma semántica que las consultas del backend ORM: paginación por
offset, detalles devueltos en el mismo viaje que la orden (una fila por
detalle) y ajuste del total de la orden al agregar o quitar detalles.
"""
from sqlalchemy.engine import Connection
import logging

logger = logging.getLogger(__name__)


def _order_rows(alias: str) -> str:
    return f"""
    SELECT {alias}.id, {alias}.customer_name, {alias}.total_amount, {alias}.status,
           {alias}.created_at, {alias}.updated_at,
           d.id, d.product_name, d.quantity, d.price
"""


PROCEDURES = {
    "get_orders_paginated": f"""
CREATE OR REPLACE FUNCTION get_orders_paginated(p_page_number integer, p_page_size integer)
RETURNS TABLE (
    order_id integer, customer_name varchar, total_amount numeric, status integer,
    created_at timestamptz, updated_at timestamptz,
    detail_id integer, product_name varchar, quantity integer, price numeric
)
LANGUAGE sql STABLE AS $$
    WITH page AS (
        SELECT * FROM orders
        ORDER BY orders.created_at DESC, orders.id DESC
        OFFSET (p_page_number - 1)::bigint * p_page_size
        LIMIT p_page_size
    )
    {_order_rows("p")}
    FROM page p
    LEFT JOIN order_details d ON d.order_id = p.id
    ORDER BY p.created_at DESC, p.id DESC, d.id
$$;
""",
    "get_order_with_details": f"""
CREATE OR REPLACE FUNCTION get_order_with_details(p_order_id integer)
RETURNS TABLE (
    order_id integer, customer_name varchar, total_amount numeric, status integer,
    created_at timestamptz, updated_at timestamptz,
    detail_id integer, product_name varchar, quantity integer, price numeric
)
LANGUAGE sql STABLE AS $$
    {_order_rows("o")}
    FROM orders o
    LEFT JOIN order_details d ON d.order_id = o.id
    WHERE o.id = p_order_id
    ORDER BY d.id
$$;
""",
    "create_order": """
CREATE OR REPLACE FUNCTION create_order(p_customer_name varchar, p_status integer, p_order_details jsonb)
RETURNS integer
LANGUAGE plpgsql AS $$
DECLARE
    v_now timestamptz := clock_timestamp();
    v_order_id integer;
BEGIN
    INSERT INTO orders (customer_name, total_amount, status, created_at, updated_at)
    VALUES (p_customer_name, 0, p_status, v_now, v_now)
    RETURNING id INTO v_order_id;

    INSERT INTO order_details (order_id, product_name, quantity, price)
    SELECT v_order_id, d.product_name, d.quantity, d.price
    FROM jsonb_to_recordset(COALESCE(p_order_details, '[]'::jsonb))
         AS d(product_name varchar, quantity integer, price numeric);

    IF FOUND THEN
        UPDATE orders
        SET total_amount = (
            SELECT SUM(od.price * od.quantity) FROM order_details od WHERE od.order_id = v_order_id
        )
        WHERE id = v_order_id;
    END IF;

    RETURN v_order_id;
END;
$$;
""",
    "update_order": """
CREATE OR REPLACE FUNCTION update_order(p_order_id integer, p_customer_name varchar, p_status integer)
RETURNS boolean
LANGUAGE plpgsql AS $$
BEGIN
    UPDATE orders o
    SET customer_name = p_customer_name,
        status = p_status,
        updated_at = clock_timestamp(),
        total_amount = COALESCE(
            (SELECT SUM(od.price * od.quantity) FROM order_details od WHERE od.order_id = o.id),
            o.total_amount
        )
    WHERE o.id = p_order_id;
    RETURN FOUND;
END;
$$;
""",
    "delete_order": """
CREATE OR REPLACE FUNCTION delete_order(p_order_id integer)
RETURNS integer
LANGUAGE plpgsql AS $$
DECLARE
    v_rows integer;
BEGIN
    DELETE FROM orders WHERE id = p_order_id;
    GET DIAGNOSTICS v_rows = ROW_COUNT;
    RETURN v_rows;
END;
$$;
""",
    "add_order_detail": """
CREATE OR REPLACE FUNCTION add_order_detail(
    p_order_id integer, p_product_name varchar, p_quantity integer, p_price numeric
)
RETURNS integer
LANGUAGE plpgsql AS $$
DECLARE
    v_detail_id integer;
BEGIN
    INSERT INTO order_details (order_id, product_name, quantity, price)
    VALUES (p_order_id, p_product_name, p_quantity, p_price)
    RETURNING id INTO v_detail_id;

    UPDATE orders
    SET total_amount = total_amount + p_price * p_quantity,
        updated_at = clock_timestamp()
    WHERE id = p_order_id;

    RETURN v_detail_id;
END;
$$;
""",
    "delete_order_detail": """
CREATE OR REPLACE FUNCTION delete_order_detail(p_order_detail_id integer)
RETURNS integer
LANGUAGE plpgsql AS $$
DECLARE
    v_order_id integer;
    v_price numeric;
    v_quantity integer;
BEGIN
    DELETE FROM order_details
    WHERE id = p_order_detail_id
    RETURNING order_id, price, quantity INTO v_order_id, v_price, v_quantity;

    IF NOT FOUND THEN
        RETURN 0;
    END IF;

    UPDATE orders
    SET total_amount = total_amount - v_price * v_quantity,
        updated_at = clock_timestamp()
    WHERE id = v_order_id;

    RETURN 1;
END;
$$;
""",
}


def install_procedures(conn: Connection) -> None:
    for name, ddl in PROCEDURES.items():
        conn.exec_driver_sql(ddl)
        logger.info(f"Función '{name}' instalada")


def drop_procedures(conn: Connection) -> None:
    for name in PROCEDURES:
        conn.exec_driver_sql(f"DROP FUNCTION IF EXISTS {name} CASCADE")
