"""Reply reason code messages (``reasonCode`` in the ``replyMessage``).

Code 500 is client-side: the request never produced a gateway reply.
"""
from typing import Dict, Optional

REASON_CODES: Dict[str, Dict[int, str]] = {
    "en": {
        100: "Successful transaction.",
        101: "The request is missing one or more required fields.",
        102: "One or more fields in the request contains invalid data.",
        104: "The merchantReferenceCode sent with this authorization request matches one sent in the last 15 minutes.",
        110: "Only a partial amount was approved.",
        150: "General system failure.",
        151: "The request was received but there was a server timeout.",
        152: "The request was received, but a service did not finish running in time.",
        200: "The authorization request was approved by the issuing bank but declined because it did not pass the Address Verification Service check.",
        201: "The issuing bank has questions about the request. Call the processor to obtain a verbal authorization.",
        202: "Expired card.",
        203: "General decline of the card.",
        204: "Insufficient funds in the account.",
        205: "Stolen or lost card.",
        207: "Issuing bank unavailable.",
        208: "Inactive card or card not authorized for card-not-present transactions.",
        209: "American Express Card Identification Digits (CID) did not match.",
        210: "The card has reached the credit limit.",
        211: "Invalid card verification number.",
        221: "The customer matched an entry on the processor's negative file.",
        230: "The authorization request was approved by the issuing bank but declined because it did not pass the card verification number check.",
        231: "Invalid account number.",
        232: "The card type is not accepted by the payment processor.",
        233: "General decline by the processor.",
        234: "There is a problem with your CyberSource merchant configuration.",
        235: "The requested amount exceeds the originally authorized amount.",
        236: "Processor failure.",
        237: "The authorization has already been reversed.",
        238: "The authorization has already been captured.",
        239: "The requested transaction amount must match the previous transaction amount.",
        240: "The card type sent is invalid or does not correlate with the credit card number.",
        241: "The request ID is invalid.",
        242: "You requested a capture, but there is no corresponding, unused authorization record.",
        243: "The transaction has already been settled or reversed.",
        246: "The capture or credit is not voidable.",
        247: "You requested a credit for a capture that was previously voided.",
        250: "The request was received, but there was a timeout at the payment processor.",
        475: "The cardholder is enrolled for payer authentication.",
        476: "Payer authentication could not be authenticated.",
        480: "The order is marked for review by Decision Manager.",
        481: "The order is rejected by Decision Manager.",
        500: "The request could not be sent to CyberSource.",
    },
    "es": {
        100: "Transacción exitosa.",
        101: "Falta uno o más campos requeridos en la solicitud.",
        102: "Uno o más campos de la solicitud contienen datos inválidos.",
        104: "El merchantReferenceCode enviado coincide con uno enviado en los últimos 15 minutos.",
        110: "Solo se aprobó un monto parcial.",
        150: "Falla general del sistema.",
        151: "La solicitud fue recibida pero el servidor excedió el tiempo de espera.",
        152: "La solicitud fue recibida pero un servicio no terminó a tiempo.",
        200: "La autorización fue aprobada por el banco emisor pero rechazada por la verificación de dirección (AVS).",
        201: "El banco emisor tiene preguntas sobre la solicitud. Llame al procesador para obtener una autorización verbal.",
        202: "Tarjeta vencida.",
        203: "Rechazo general de la tarjeta.",
        204: "Fondos insuficientes en la cuenta.",
        205: "Tarjeta robada o extraviada.",
        207: "Banco emisor no disponible.",
        208: "Tarjeta inactiva o no autorizada para transacciones sin tarjeta presente.",
        209: "Los dígitos de identificación de la tarjeta American Express (CID) no coinciden.",
        210: "La tarjeta alcanzó su límite de crédito.",
        211: "Número de verificación de la tarjeta inválido.",
        221: "El cliente coincide con una entrada en la lista negativa del procesador.",
        230: "La autorización fue aprobada por el banco emisor pero rechazada por la verificación del código de seguridad.",
        231: "Número de cuenta inválido.",
        232: "El procesador de pagos no acepta este tipo de tarjeta.",
        233: "Rechazo general del procesador.",
        234: "Hay un problema con la configuración de su comercio en CyberSource.",
        235: "El monto solicitado excede el monto autorizado originalmente.",
        236: "Falla del procesador.",
        237: "La autorización ya fue revertida.",
        238: "La autorización ya fue capturada.",
        239: "El monto de la transacción debe coincidir con el monto de la transacción anterior.",
        240: "El tipo de tarjeta enviado es inválido o no corresponde con el número de tarjeta.",
        241: "El identificador de la solicitud es inválido.",
        242: "Se solicitó una captura pero no existe una autorización correspondiente sin usar.",
        243: "La transacción ya fue liquidada o revertida.",
        246: "La captura o el crédito no se puede anular.",
        247: "Se solicitó un crédito para una captura que ya fue anulada.",
        250: "La solicitud fue recibida pero el procesador de pagos excedió el tiempo de espera.",
        475: "El tarjetahabiente está inscrito en autenticación del pagador.",
        476: "No se pudo autenticar al pagador.",
        480: "La orden fue marcada para revisión por Decision Manager.",
        481: "La orden fue rechazada por Decision Manager.",
        500: "No se pudo enviar la solicitud a CyberSource.",
    },
}


class ReasonCodes:
    def __init__(self, language: str = "en"):
        self.language = language if language in REASON_CODES else "en"

    def get_message(self, code) -> Optional[str]:
        try:
            return REASON_CODES[self.language].get(int(code))
        except (TypeError, ValueError):
            return None
