"""
Request builders for the supported Workday operations.

Each builder returns the operation together with the children of its request
element. Element names follow the Human_Resources WSDL; optional elements the
caller did not supply are omitted rather than sent empty.
"""

import secrets
import string
from typing import Optional, Tuple

from workday_hub.domain.models import ContactInfo, PhoneNumber
from workday_hub.domain.payload import Fields, Scalar
from workday_hub.domain.worker_reference import ReferenceStyle, resolve_worker_reference

from .models import Operation

WORK_USAGE_TYPE = "Work"
LANDLINE_DEVICE_TYPE = "Landline"

PASSWORD_ALPHABET = string.digits + string.ascii_letters + "!@#$%^&*()_+"
DEFAULT_PASSWORD_LENGTH = 10

Request = Tuple[Operation, Fields]


def generate_password(length: int = DEFAULT_PASSWORD_LENGTH) -> str:
    """
    Random password for a new Workday account.

    Accounts are expected to sign in through SSO, so nobody needs to know this
    password; it only has to satisfy Workday's password rules.
    """
    if length < 1:
        raise ValueError("Password length must be positive")
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))


def _work_usage_data() -> Fields:
    return Fields.of(
        Public=True,
        Type_Data=Fields.of(
            Primary=True,
            Type_Reference=Fields.of(
                ID=Scalar.of(WORK_USAGE_TYPE, type="Communication_Usage_Type_ID")
            ),
        ),
    )


def _email_address_data(email: str) -> Fields:
    return Fields.of(Email_Address=email, Usage_Data=_work_usage_data())


def _phone_data(phone: PhoneNumber) -> Fields:
    return Fields.of(
        International_Phone_Code=phone.intl_code,
        Area_Code=phone.area_code,
        Phone_Number=phone.number,
        Phone_Extension=phone.extension,
        Phone_Device_Type_Reference=Fields.of(
            ID=Scalar.of(LANDLINE_DEVICE_TYPE, type="Phone_Device_Type_ID")
        ),
        Usage_Data=_work_usage_data(),
    )


def build_contact_information_request(worker_id: str, contact: ContactInfo) -> Request:
    """Maintain_Contact_Information for a worker's work email and/or phone."""
    reference = resolve_worker_reference(worker_id, ReferenceStyle.SIMPLE_ID)

    contact_data = Fields()
    if contact.email is not None:
        contact_data = contact_data.with_field(
            "Email_Address_Data", _email_address_data(contact.email)
        )
    if contact.phone is not None:
        contact_data = contact_data.with_field("Phone_Data", _phone_data(contact.phone))

    payload = Fields.of(
        Business_Process_Parameters=Fields.of(Auto_Complete=True, Run_Now=True),
        Maintain_Contact_Information_Data=Fields.of(
            Worker_Reference=reference.to_node(),
            Worker_Contact_Information_Data=contact_data,
        ),
    )
    return Operation.MAINTAIN_CONTACT_INFORMATION, payload


def build_worker_photo_request(
    worker_id: str, content: bytes, filename: Optional[str] = None
) -> Request:
    """Put_Worker_Photo; zeep base64-encodes ``content`` for the wire."""
    reference = resolve_worker_reference(worker_id, ReferenceStyle.SIMPLE_ID)
    payload = Fields.of(
        Worker_Reference=reference.to_node(),
        Worker_Photo_Data=Fields.of(Filename=filename, File=content),
    )
    return Operation.PUT_WORKER_PHOTO, payload


def build_add_account_request(
    worker_id: str, username: str, password: Optional[str] = None
) -> Request:
    """
    Add_Workday_Account for a worker that has no account yet.

    Workday rejects the request when the worker already has an account; no
    existence check is done here.
    """
    reference = resolve_worker_reference(worker_id, ReferenceStyle.INTEGRATION_ID)
    payload = Fields.of(
        Worker_Reference=reference.to_node(),
        Workday_Account_for_Worker_Data=Fields.of(
            User_Name=username,
            Password=password if password is not None else generate_password(),
        ),
    )
    return Operation.ADD_WORKDAY_ACCOUNT, payload


def build_update_account_request(worker_id: str, username: str) -> Request:
    """Update_Workday_Account renaming the worker's user name."""
    reference = resolve_worker_reference(worker_id, ReferenceStyle.INTEGRATION_ID)
    payload = Fields.of(
        Worker_Reference=reference.to_node(),
        Workday_Account_for_Worker_Data=Fields.of(User_Name=username),
    )
    return Operation.UPDATE_WORKDAY_ACCOUNT, payload
