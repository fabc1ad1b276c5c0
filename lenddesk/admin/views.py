from sqladmin import ModelView

from lenddesk.inquiry.models import Inquiry
from lenddesk.item.models import Item
from lenddesk.user.models import User


class UserAdmin(ModelView, model=User):
    name = "User"
    name_plural = "Users"
    icon = "fa-solid fa-user"

    column_list = [
        User.username,
        User.email,
        User.first_name,
        User.last_name,
        User.role,
        User.approval_status,
        User.is_active,
        User.created_at,
    ]
    column_searchable_list = [User.email, User.username, User.last_name]
    column_sortable_list = [
        User.username,
        User.email,
        User.role,
        User.approval_status,
        User.created_at,
    ]
    form_excluded_columns = [User.external_id, User.created_at, User.updated_at]


class ItemAdmin(ModelView, model=Item):
    name = "Item"
    name_plural = "Items"
    icon = "fa-solid fa-box"

    column_list = [
        Item.name,
        Item.qty_total,
        Item.qty_available,
        Item.is_active,
        Item.created_at,
    ]
    column_searchable_list = [Item.name]
    column_sortable_list = [
        Item.name,
        Item.qty_total,
        Item.qty_available,
        Item.created_at,
    ]
    form_excluded_columns = [Item.created_at, Item.updated_at]


class InquiryAdmin(ModelView, model=Inquiry):
    """Read-only: status only changes through the reply endpoint."""

    name = "Inquiry"
    name_plural = "Inquiries"
    icon = "fa-solid fa-envelope"

    can_create = False
    can_edit = False
    can_delete = False

    column_list = [
        Inquiry.item_name,
        Inquiry.user_name,
        Inquiry.status,
        Inquiry.is_read,
        Inquiry.is_read_by_admin,
        Inquiry.replied_at,
        Inquiry.created_at,
    ]
    column_searchable_list = [Inquiry.item_name, Inquiry.user_name]
    column_sortable_list = [Inquiry.status, Inquiry.created_at, Inquiry.replied_at]
