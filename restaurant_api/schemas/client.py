from restaurant_api.schemas.user import RegisterBase, UserOut


class ClientCreate(RegisterBase):
    pass


class ClientResponse(UserOut):
    pass
