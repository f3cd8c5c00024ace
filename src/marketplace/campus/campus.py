"""Campus aggregate — the universities the marketplace serves."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.shared.access import require_role


@marketplace.aggregate
class Campus:
    name = String(required=True, max_length=100)


@marketplace.command(part_of="Campus")
class RegisterCampus:
    admin_id = Identifier(required=True)
    campus_id = Identifier()
    name = String(required=True, max_length=100)


@marketplace.command_handler(part_of=Campus)
class RegisterCampusHandler:
    @handle(RegisterCampus)
    def register_campus(self, command):
        require_role(command.admin_id, "admin")

        fields = {"name": command.name}
        if command.campus_id:
            fields["id"] = command.campus_id
        campus = Campus(**fields)
        current_domain.repository_for(Campus).add(campus)
        return str(campus.id)


def list_campuses():
    return current_domain.repository_for(Campus)._dao.query.order_by("name").all().items
